from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass

# Import models so metadata.create_all can discover them
from app.models import *  # noqa
