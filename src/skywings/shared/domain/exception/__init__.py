from .exceptions import AlreadyCancelledException as AlreadyCancelledException
from .exceptions import BookingNotFoundException as BookingNotFoundException
from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import ConflictException as ConflictException
from .exceptions import DomainException as DomainException
from .exceptions import DuplicateResourceException as DuplicateResourceException
from .exceptions import NoFlightsFoundException as NoFlightsFoundException
from .exceptions import OfferNotFoundException as OfferNotFoundException
from .exceptions import OptimisticLockException as OptimisticLockException
from .exceptions import RateLimitedException as RateLimitedException
from .exceptions import (
    ReferenceGenerationException as ReferenceGenerationException,
)
from .exceptions import ResourceNotFoundException as ResourceNotFoundException
from .exceptions import UpstreamException as UpstreamException
from .exceptions import ValidationException as ValidationException
