from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models import Base from here; quickjob.db.models registers them all for
# create_all() and Alembic autogenerate.
