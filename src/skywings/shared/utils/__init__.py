from .error_handling import handle_api_errors as handle_api_errors
from .http_response import api_response as api_response
from .http_response import error_response as error_response
from .http_response import internal_error_response as internal_error_response
from .http_response import validation_error_response as validation_error_response
from .validators import blank_to_none as blank_to_none
from .validators import normalize_code as normalize_code
