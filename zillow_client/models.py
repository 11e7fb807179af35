'''
Request and result types for the Zillow web service.

Requests know how to turn themselves into query parameters. Results are decoded
from the XML documents returned by the service and are never modified afterwards.
Missing elements decode to zero values ('', 0, 0.0, False, empty tuple). When a single
valued element repeats, the last one wins.
'''
from dataclasses import dataclass, field
from typing import ClassVar, Tuple
from xml.etree import ElementTree as etree

_TRUE_STRINGS = ('1', 't', 'T', 'TRUE', 'true', 'True')
_FALSE_STRINGS = ('0', 'f', 'F', 'FALSE', 'false', 'False')


#------------------------------------------------------------------------------------------------------------------
class XMLStructureError(ValueError):
    '''Response document does not have the shape expected for the operation.'''


#------------------------------------------------------------------------------------------------------------------
def _local_name(tag):
    return tag.rsplit('}', 1)[-1]
#------------------------------------------------------------------------------------------------------------------
def _find(n, path):
    # a repeated element overwrites the earlier ones, the last match wins
    matches = _findall(n, path)
    return matches[-1] if matches else None
#------------------------------------------------------------------------------------------------------------------
def _findall(n, path):
    return [] if n is None else n.findall(path)
#------------------------------------------------------------------------------------------------------------------
def _chardata(n):
    # direct character data only, text of child elements is not part of the value
    if n is None:
        return ''
    return (n.text or '') + ''.join(sub_n.tail or '' for sub_n in n)
#------------------------------------------------------------------------------------------------------------------
def _text(n, path):
    return _chardata(_find(n, path))
#------------------------------------------------------------------------------------------------------------------
def _attr(n, name):
    return '' if n is None else n.get(name, '')
#------------------------------------------------------------------------------------------------------------------
def _parse_int(s):
    s = s.strip()
    return int(s, 10) if s else 0
#------------------------------------------------------------------------------------------------------------------
def _parse_float(s):
    s = s.strip()
    return float(s) if s else 0.0
#------------------------------------------------------------------------------------------------------------------
def _parse_bool(s):
    s = s.strip()
    if not s or s in _FALSE_STRINGS:
        return False
    if s in _TRUE_STRINGS:
        return True
    raise ValueError("invalid boolean value: '{}'".format(s))
#------------------------------------------------------------------------------------------------------------------
def _format_bool(b):
    return 'true' if b else 'false'


#==================================================================================================================
# Common sub-structures
#==================================================================================================================
@dataclass(frozen=True)
class Message:
    text: str = ''
    code: int = 0
    limit_warning: bool = False

    @classmethod
    def _from_node(cls, n):
        return cls(text=_text(n, 'text'),
                   code=_parse_int(_text(n, 'code')),
                   limit_warning=_parse_bool(_text(n, 'limit-warning')))

    @property
    def ok(self):
        return self.code == 0

    def errors(self):
        '''
        Status reported by the service inside a successful response, as a list of
        "Code N: text" strings. Empty when the request succeeded.
        '''
        if self.ok:
            return []
        return ["Code {}: {}".format(self.code, self.text)]


@dataclass(frozen=True)
class Address:
    street: str = ''
    zipcode: str = ''
    city: str = ''
    state: str = ''
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def _from_node(cls, n):
        return cls(street=_text(n, 'street'),
                   zipcode=_text(n, 'zipcode'),
                   city=_text(n, 'city'),
                   state=_text(n, 'state'),
                   latitude=_parse_float(_text(n, 'latitude')),
                   longitude=_parse_float(_text(n, 'longitude')))


@dataclass(frozen=True)
class Value:
    currency: str = ''
    value: int = 0

    @classmethod
    def _from_node(cls, n):
        return cls(currency=_attr(n, 'currency'), value=_parse_int(_chardata(n)))


@dataclass(frozen=True)
class ValueChange:
    duration: int = 0
    currency: str = ''
    value: int = 0

    @classmethod
    def _from_node(cls, n):
        return cls(duration=_parse_int(_attr(n, 'duration')),
                   currency=_attr(n, 'currency'),
                   value=_parse_int(_chardata(n)))


@dataclass(frozen=True)
class Zestimate:
    amount: Value = field(default_factory=Value)
    last_updated: str = ''
    value_change: ValueChange = field(default_factory=ValueChange)
    low: Value = field(default_factory=Value)
    high: Value = field(default_factory=Value)
    percentile: str = ''

    @classmethod
    def _from_node(cls, n):
        return cls(amount=Value._from_node(_find(n, 'amount')),
                   last_updated=_text(n, 'last-updated'),
                   value_change=ValueChange._from_node(_find(n, 'valueChange')),
                   low=Value._from_node(_find(n, 'valuationRange/low')),
                   high=Value._from_node(_find(n, 'valuationRange/high')),
                   percentile=_text(n, 'percentile'))


@dataclass(frozen=True)
class Region:
    id: str = ''
    type: str = ''
    name: str = ''
    zindex: str = ''
    zindex_one_year_change: float = 0.0
    # links
    overview: str = ''
    for_sale_by_owner: str = ''
    for_sale: str = ''

    @classmethod
    def _from_node(cls, n):
        return cls(id=_attr(n, 'id'),
                   type=_attr(n, 'type'),
                   name=_attr(n, 'name'),
                   zindex=_text(n, 'zindexValue'),
                   zindex_one_year_change=_parse_float(_text(n, 'zindexOneYearChange')),
                   overview=_text(n, 'links/overview'),
                   for_sale_by_owner=_text(n, 'links/forSaleByOwner'),
                   for_sale=_text(n, 'links/forSale'))


@dataclass(frozen=True)
class Links:
    home_details: str = ''
    graphs_and_data: str = ''
    map_this_home: str = ''
    my_zestimator: str = ''
    comparables: str = ''

    @classmethod
    def _from_node(cls, n):
        return cls(home_details=_text(n, 'homedetails'),
                   graphs_and_data=_text(n, 'graphsanddata'),
                   map_this_home=_text(n, 'mapthishome'),
                   my_zestimator=_text(n, 'myzestimator'),
                   comparables=_text(n, 'comparables'))


def _regions(n, path):
    return tuple(Region._from_node(r) for r in _findall(n, path))


#==================================================================================================================
# Requests
#==================================================================================================================
@dataclass(frozen=True)
class ZestimateRequest:
    zpid: str = ''
    rentzestimate: bool = False

    def to_params(self):
        return {
            'zpid': self.zpid,
            'rentzestimate': _format_bool(self.rentzestimate),
        }

    @classmethod
    def _from_node(cls, n):
        return cls(zpid=_text(n, 'zpid'), rentzestimate=_parse_bool(_text(n, 'rentzestimate')))


@dataclass(frozen=True)
class SearchRequest:
    address: str = ''
    citystatezip: str = ''
    rentzestimate: bool = False

    def to_params(self):
        return {
            'address': self.address,
            'citystatezip': self.citystatezip,
            'rentzestimate': _format_bool(self.rentzestimate),
        }

    @classmethod
    def _from_node(cls, n):
        return cls(address=_text(n, 'address'),
                   citystatezip=_text(n, 'citystatezip'),
                   rentzestimate=_parse_bool(_text(n, 'rentzestimate')))


@dataclass(frozen=True)
class ChartRequest:
    '''
    unit_type is "percent" or "dollar". duration is one of "1year", "5years", "10years".
    '''
    zpid: str = ''
    unit_type: str = ''
    width: int = 0
    height: int = 0
    duration: str = ''

    def to_params(self):
        return {
            'zpid': self.zpid,
            'unit-type': self.unit_type,
            'width': str(self.width),
            'height': str(self.height),
            'chartDuration': self.duration,
        }

    @classmethod
    def _from_node(cls, n):
        return cls(zpid=_text(n, 'zpid'),
                   unit_type=_text(n, 'unit-type'),
                   width=_parse_int(_text(n, 'width')),
                   height=_parse_int(_text(n, 'height')),
                   duration=_text(n, 'chartDuration'))


@dataclass(frozen=True)
class CompsRequest:
    zpid: str = ''
    count: int = 0
    rentzestimate: bool = False

    def to_params(self):
        return {
            'zpid': self.zpid,
            'count': str(self.count),
            'rentzestimate': _format_bool(self.rentzestimate),
        }

    @classmethod
    def _from_node(cls, n):
        return cls(zpid=_text(n, 'zpid'),
                   count=_parse_int(_text(n, 'count')),
                   rentzestimate=_parse_bool(_text(n, 'rentzestimate')))


#==================================================================================================================
# Results
#==================================================================================================================
class _Result(object):
    # local name of the document element, namespace prefix is ignored
    _ROOT = None

    @classmethod
    def from_xml(cls, xml_text):
        '''
        Decode a complete response document (str or bytes).
        Raises etree.ParseError on malformed XML, content after the document element
        included. Raises XMLStructureError/ValueError when the document does not match
        the result type.
        '''
        xml = etree.fromstring(xml_text)
        root_name = _local_name(xml.tag)
        if root_name != cls._ROOT:
            raise XMLStructureError("expected element <{}> but have <{}>".format(cls._ROOT, root_name))
        return cls._from_node(xml)


@dataclass(frozen=True)
class ZestimateResult(_Result):
    _ROOT: ClassVar[str] = 'zestimate'

    request: ZestimateRequest = field(default_factory=ZestimateRequest)
    message: Message = field(default_factory=Message)

    links: Links = field(default_factory=Links)
    address: Address = field(default_factory=Address)
    zestimate: Zestimate = field(default_factory=Zestimate)
    local_real_estate: Tuple[Region, ...] = ()

    zipcode_id: str = ''
    city_id: str = ''
    county_id: str = ''
    state_id: str = ''

    @classmethod
    def _from_node(cls, n):
        resp = _find(n, 'response')
        return cls(request=ZestimateRequest._from_node(_find(n, 'request')),
                   message=Message._from_node(_find(n, 'message')),
                   links=Links._from_node(_find(resp, 'links')),
                   address=Address._from_node(_find(resp, 'address')),
                   zestimate=Zestimate._from_node(_find(resp, 'zestimate')),
                   local_real_estate=_regions(resp, 'localRealEstate/region'),
                   zipcode_id=_text(resp, 'regions/zipcode-id'),
                   city_id=_text(resp, 'regions/city-id'),
                   county_id=_text(resp, 'regions/county-id'),
                   state_id=_text(resp, 'regions/state-id'))


@dataclass(frozen=True)
class SearchResult:
    zpid: str = ''
    links: Links = field(default_factory=Links)
    address: Address = field(default_factory=Address)
    zestimate: Zestimate = field(default_factory=Zestimate)
    local_real_estate: Tuple[Region, ...] = ()

    @classmethod
    def _from_node(cls, n):
        return cls(zpid=_text(n, 'zpid'),
                   links=Links._from_node(_find(n, 'links')),
                   address=Address._from_node(_find(n, 'address')),
                   zestimate=Zestimate._from_node(_find(n, 'zestimate')),
                   local_real_estate=_regions(n, 'localRealEstate/region'))


@dataclass(frozen=True)
class SearchResults(_Result):
    _ROOT: ClassVar[str] = 'searchresults'

    request: SearchRequest = field(default_factory=SearchRequest)
    message: Message = field(default_factory=Message)
    results: Tuple[SearchResult, ...] = ()

    @classmethod
    def _from_node(cls, n):
        return cls(request=SearchRequest._from_node(_find(n, 'request')),
                   message=Message._from_node(_find(n, 'message')),
                   results=tuple(SearchResult._from_node(r) for r in n.findall('response/results/result')))


@dataclass(frozen=True)
class ChartResult(_Result):
    _ROOT: ClassVar[str] = 'chart'

    request: ChartRequest = field(default_factory=ChartRequest)
    message: Message = field(default_factory=Message)
    url: str = ''

    @classmethod
    def _from_node(cls, n):
        return cls(request=ChartRequest._from_node(_find(n, 'request')),
                   message=Message._from_node(_find(n, 'message')),
                   url=_text(n, 'response/url'))


@dataclass(frozen=True)
class Principal:
    zpid: str = ''
    links: Links = field(default_factory=Links)
    address: Address = field(default_factory=Address)
    zestimate: Zestimate = field(default_factory=Zestimate)

    @classmethod
    def _from_node(cls, n):
        return cls(zpid=_text(n, 'zpid'),
                   links=Links._from_node(_find(n, 'links')),
                   address=Address._from_node(_find(n, 'address')),
                   zestimate=Zestimate._from_node(_find(n, 'zestimate')))


@dataclass(frozen=True)
class Comp:
    score: float = 0.0
    zpid: str = ''
    links: Links = field(default_factory=Links)
    address: Address = field(default_factory=Address)
    zestimate: Zestimate = field(default_factory=Zestimate)

    @classmethod
    def _from_node(cls, n):
        return cls(score=_parse_float(_attr(n, 'score')),
                   zpid=_text(n, 'zpid'),
                   links=Links._from_node(_find(n, 'links')),
                   address=Address._from_node(_find(n, 'address')),
                   zestimate=Zestimate._from_node(_find(n, 'zestimate')))


@dataclass(frozen=True)
class CompsResult(_Result):
    _ROOT: ClassVar[str] = 'comps'

    request: CompsRequest = field(default_factory=CompsRequest)
    message: Message = field(default_factory=Message)
    principal: Principal = field(default_factory=Principal)
    comparables: Tuple[Comp, ...] = ()

    @classmethod
    def _from_node(cls, n):
        return cls(request=CompsRequest._from_node(_find(n, 'request')),
                   message=Message._from_node(_find(n, 'message')),
                   principal=Principal._from_node(_find(n, 'response/properties/principal')),
                   comparables=tuple(Comp._from_node(c) for c in n.findall('response/properties/comparables/comp')))
