# pawpal/screens/__init__.py
from .base import Notice, ScreenResult, ListScreen
from .pets import PetsScreen
from .feeding import FeedingScreen
from .health import HealthScreen
from .vets import VetScreen
from .summary import SummaryScreen
