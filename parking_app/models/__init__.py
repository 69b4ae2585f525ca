# Campus Parking — Database Models
# Import all models here for SQLAlchemy discovery

from parking_app.models.lot import Lot             # noqa
from parking_app.models.scan import Scan           # noqa
from parking_app.models.vehicle import Vehicle     # noqa
