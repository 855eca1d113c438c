# Import all models here to ensure they're registered with Base
from db.models.base import Base
from db.models.keys import KeyModel
