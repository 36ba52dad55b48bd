from .settings import settings, Settings
from .security import SecurityConfig
