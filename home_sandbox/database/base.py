from sqlalchemy.orm import declarative_base

# Create base class for declarative models
Base = declarative_base()
