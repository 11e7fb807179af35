'''
Client for the Zillow web service (http://www.zillow.com/howto/api/APIOverview.htm)

    z = new_zillow('<YOUR_ZWSID>')
    res = z.get_zestimate(ZestimateRequest('48749425'))
    print(res.zestimate.amount.value)

The service reports application errors inside a normal response - check result.message
(code 0 is success). Transport failures raise requests exceptions, bad documents raise
ElementTree.ParseError / ValueError.
'''
import sys
import logging
import pprint

import requests

from zillow_client import misc
from zillow_client.models import (ZestimateRequest, ZestimateResult, SearchRequest, SearchResults,
                                  ChartRequest, ChartResult, CompsRequest, CompsResult)

BASE_URL = 'http://www.zillow.com/webservice'

ZWS_ID_PARAM = 'zws-id'

GET_ZESTIMATE = 'GetZestimate'
GET_SEARCH_RESULTS = 'GetSearchResults'
GET_CHART = 'GetChart'
GET_COMPS = 'GetComps'

#------------------------------------------------------------------------------------------------------------------
class Zillow(object):
    #--------------------------------------------------------------------------------------
    def __init__(self, zws_id, base_url=BASE_URL, session=None):
        '''
        :param zws_id: Zillow Web Service ID (API key)
        :param base_url: service root, operation paths are appended as <path>.htm
        :param session: optional requests.Session - timeouts, proxies and adapters are configured there
        '''
        self._zws_id = zws_id
        self._base_url = base_url
        self._session = session

    @property
    def base_url(self):
        return self._base_url

    #--------------------------------------------------------------------------------------
    def _get(self, service_path, params, result_class):
        url = '{}/{}.htm'.format(self._base_url.rstrip('/'), service_path)
        query = {ZWS_ID_PARAM: self._zws_id}
        query.update(params)
        logging.debug("Zillow request {} Params: {}".format(url, params))

        http_get = self._session.get if self._session is not None else requests.get
        with misc.Timer() as t:
            resp = http_get(url, params=query)
        logging.debug("Zillow request {} returned {} in {:.3f} secs".format(service_path, resp.status_code, t()))
        resp.raise_for_status()

        return result_class.from_xml(resp.content)

    #--------------------------------------------------------------------------------------
    def get_zestimate(self, request):
        ''' Zestimate for a zpid. Returns ZestimateResult '''
        return self._get(GET_ZESTIMATE, request.to_params(), ZestimateResult)

    #--------------------------------------------------------------------------------------
    def get_search_results(self, request):
        ''' Properties matching an address and city/state/zip. Returns SearchResults '''
        return self._get(GET_SEARCH_RESULTS, request.to_params(), SearchResults)

    #--------------------------------------------------------------------------------------
    def get_chart(self, request):
        ''' URL of a historical zestimate chart image. Returns ChartResult '''
        return self._get(GET_CHART, request.to_params(), ChartResult)

    #--------------------------------------------------------------------------------------
    def get_comps(self, request):
        ''' Principal property and its comparables, ordered as returned. Returns CompsResult '''
        return self._get(GET_COMPS, request.to_params(), CompsResult)

#------------------------------------------------------------------------------------------------------------------
def new_zillow(zws_id):
    return Zillow(zws_id, BASE_URL)

#------------------------------------------------------------------------------------------------------------------
if __name__ == '__main__':
    misc.set_logging(level=logging.DEBUG)
    if len(sys.argv) != 4:
        print("Usage: python -m zillow_client.zillow <ZWSID> <address> <citystatezip>")
        sys.exit(2)
    ZWSID, address, citystatezip = sys.argv[1:]

    z = new_zillow(ZWSID)
    print("Searching '{} {}'".format(address, citystatezip))
    res = z.get_search_results(SearchRequest(address, citystatezip))
    errs = res.message.errors()
    if errs:
        logging.error("Search failed\n{}".format('\n'.join(errs)))
        sys.exit(1)
    pprint.pprint(res.results)
    for r in res.results:
        print('{}: Estimated Price: {} {}'.format(r.zpid, r.zestimate.amount.value, r.zestimate.amount.currency))
