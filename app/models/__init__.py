# Fleet work-order service — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.profile import Profile                              # noqa
from app.models.vehicle import Vehicle                              # noqa
from app.models.vehicle_status_history import VehicleStatusHistory  # noqa
from app.models.work_order import WorkOrder                         # noqa
from app.models.work_order_settings import WorkOrderSettings        # noqa
