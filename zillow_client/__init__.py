from zillow_client.models import (Message, Address, Value, ValueChange, Zestimate, Region, Links,
                                  ZestimateRequest, ZestimateResult, SearchRequest, SearchResults, SearchResult,
                                  ChartRequest, ChartResult, CompsRequest, CompsResult, Principal, Comp,
                                  XMLStructureError)
from zillow_client.zillow import Zillow, new_zillow, BASE_URL

__version__ = '0.1.0'
