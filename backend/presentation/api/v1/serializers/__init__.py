"""
Serializers Package.

Request serializers for the auto shop API. Responses are rendered from the
domain objects' ``to_dict`` snapshots.
"""

from .customers import (
    CustomerCreateSerializer,
    CustomerUpdateSerializer,
    VehicleCreateSerializer,
)

from .catalog import (
    ServiceCreateSerializer,
    PartCreateSerializer,
    StockAdjustSerializer,
)

from .service_orders import (
    ServiceOrderCreateSerializer,
    ServiceOrderUpdateSerializer,
    StatusUpdateSerializer,
    ApproveSerializer,
    ObservationSerializer,
    AssignSerializer,
)
