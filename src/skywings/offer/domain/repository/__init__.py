from .offer_cache import RECENT_OFFERS_KEY as RECENT_OFFERS_KEY
from .offer_cache import OfferCache as OfferCache
