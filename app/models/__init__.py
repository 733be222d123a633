# Location Back-Office: database models
# Import all models here for SQLAlchemy discovery

from app.models.customer import Customer                      # noqa
from app.models.vehicle import Vehicle                        # noqa
from app.models.contract import Contract                      # noqa
from app.models.reservation import Reservation                # noqa
from app.models.accident import Accident                      # noqa
from app.models.charge import Charge                          # noqa
from app.models.facture import Facture                        # noqa
from app.models.client_payment import ClientPayment           # noqa
from app.models.infraction import Infraction                  # noqa
from app.models.intervention import Intervention              # noqa
from app.models.traite import Traite                          # noqa
from app.models.vehicle_inspection import VehicleInspection   # noqa
from app.models.vehicle_insurance import VehicleInsurance     # noqa
from app.models.user import User                              # noqa
