# Authentication providers
from .interface import AuthenticationInterface
from .static import StaticAuthentication
from .selectel import SelectelAuthentication
