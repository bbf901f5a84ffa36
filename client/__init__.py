from .api import ApiError, GymSlotClient
from .cache import SlotCache
from .poller import SlotPoller
