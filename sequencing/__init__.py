"""Trial sequence generation for scene-based question-answering experiments"""

from .api import *  # noqa: F403 # Brings all functions from API into the top-level sequencing namespace
from .questions import *  # noqa: F403
from .sequence import *  # noqa: F403
from .utils import *  # noqa: F403

# Functionality made available with absolute imports
from .api import __all__ as _api_all
from .questions import __all__ as _questions_all
from .sequence import __all__ as _sequence_all
from .utils import __all__ as _utils_all
from .config import settings
from .diagnostics import ConfigurationWarning, InsufficientPoolWarning

__all__ = list(
    set(_api_all + _questions_all + _sequence_all + _utils_all)
    | {"settings", "ConfigurationWarning", "InsufficientPoolWarning"}
)
