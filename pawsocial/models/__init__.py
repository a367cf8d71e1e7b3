# Import every model so SQLAlchemy registers all tables and relationships
from pawsocial.models import account, follow, block, privacy, activity  # noqa: F401
