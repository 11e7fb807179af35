import os
import unittest
import dataclasses
from xml.etree import ElementTree as etree

from zillow_client.models import (Message, Value, Region, ZestimateRequest, ZestimateResult, SearchRequest,
                                  SearchResults, ChartRequest, ChartResult, CompsRequest, CompsResult,
                                  XMLStructureError)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def load_data(name):
    with open(os.path.join(DATA_DIR, name), 'rb') as f:
        return f.read()


class TestRequestParams(unittest.TestCase):

    def test_zestimate_params(self):
        params = ZestimateRequest('48749425', rentzestimate=True).to_params()
        self.assertEqual(params, {'zpid': '48749425', 'rentzestimate': 'true'})

    def test_search_params(self):
        params = SearchRequest('2114 Bigelow Ave', 'Seattle, WA').to_params()
        self.assertEqual(params, {'address': '2114 Bigelow Ave', 'citystatezip': 'Seattle, WA',
                                  'rentzestimate': 'false'})

    def test_chart_params(self):
        params = ChartRequest('48749425', 'percent', 300, 150, '5years').to_params()
        self.assertEqual(params, {'zpid': '48749425', 'unit-type': 'percent', 'width': '300',
                                  'height': '150', 'chartDuration': '5years'})

    def test_comps_params(self):
        params = CompsRequest('48749425', 5).to_params()
        self.assertEqual(params, {'zpid': '48749425', 'count': '5', 'rentzestimate': 'false'})


class TestZestimateResult(unittest.TestCase):

    def setUp(self):
        self.result = ZestimateResult.from_xml(load_data('zestimate.xml'))

    def test_request_and_message(self):
        self.assertEqual(self.result.request, ZestimateRequest('48749425', False))
        self.assertEqual(self.result.message, Message('Request successfully processed', 0, False))
        self.assertTrue(self.result.message.ok)
        self.assertEqual(self.result.message.errors(), [])

    def test_valuation(self):
        z = self.result.zestimate
        self.assertEqual(z.amount, Value('USD', 258000))
        self.assertEqual(z.low, Value('USD', 231000))
        self.assertEqual(z.high, Value('USD', 278000))
        self.assertEqual(z.value_change.duration, 30)
        self.assertEqual(z.value_change.currency, 'USD')
        self.assertEqual(z.value_change.value, -1500)
        self.assertEqual(z.last_updated, '11/03/2009')
        self.assertEqual(z.percentile, '95')

    def test_address_and_links(self):
        a = self.result.address
        self.assertEqual((a.street, a.zipcode, a.city, a.state), ('2114 Bigelow Ave N', '98109', 'Seattle', 'WA'))
        self.assertAlmostEqual(a.latitude, 47.637933)
        self.assertAlmostEqual(a.longitude, -122.347938)
        self.assertEqual(self.result.links.map_this_home, 'http://www.zillow.com/homes/map/48749425_zpid/')
        self.assertEqual(self.result.links.my_zestimator, 'http://www.zillow.com/myzestimator/48749425_zpid/')
        self.assertEqual(self.result.links.comparables, 'http://www.zillow.com/homes/comps/48749425_zpid/')

    def test_regions(self):
        self.assertEqual([r.name for r in self.result.local_real_estate],
                         ['East Queen Anne', 'Seattle', 'Washington'])
        hood = self.result.local_real_estate[0]
        self.assertEqual(hood.id, '271856')
        self.assertEqual(hood.type, 'neighborhood')
        self.assertEqual(hood.zindex, '525,397')
        self.assertAlmostEqual(hood.zindex_one_year_change, -0.144)
        self.assertEqual(hood.for_sale, 'http://www.zillow.com/east-queen-anne-seattle-wa/')
        self.assertEqual((self.result.zipcode_id, self.result.city_id, self.result.county_id, self.result.state_id),
                         ('99569', '16037', '207', '59'))

    def test_result_is_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.result.zestimate.amount.value = 1
        self.assertIsInstance(self.result.local_real_estate, tuple)


class TestOtherResults(unittest.TestCase):

    def test_search_results(self):
        res = SearchResults.from_xml(load_data('searchresults.xml'))
        self.assertEqual(res.request.address, '2114 Bigelow Ave')
        self.assertEqual(res.request.citystatezip, 'Seattle, WA')
        self.assertEqual([r.zpid for r in res.results], ['48749425', '48749426'])
        first = res.results[0]
        self.assertEqual(first.zestimate.amount, Value('USD', 1219500))
        self.assertEqual(first.links.my_zestimator, '')
        self.assertEqual(len(first.local_real_estate), 1)

    def test_search_result_with_missing_elements(self):
        second = SearchResults.from_xml(load_data('searchresults.xml')).results[1]
        self.assertEqual(second.zestimate.amount, Value('USD', 0))
        self.assertEqual(second.zestimate.low, Value('', 0))
        self.assertEqual(second.address.latitude, 0.0)
        self.assertEqual(second.local_real_estate, ())

    def test_chart(self):
        res = ChartResult.from_xml(load_data('chart.xml'))
        self.assertEqual(res.request, ChartRequest('48749425', 'percent', 300, 150, '5years'))
        self.assertTrue(res.url.startswith('http://www.zillow.com/app?chartDuration=5years&chartType=partner'))

    def test_comps_preserve_order_and_score(self):
        res = CompsResult.from_xml(load_data('comps.xml'))
        self.assertEqual(res.request, CompsRequest('48749425', 5, False))
        self.assertEqual(res.principal.zpid, '48749425')
        self.assertEqual(res.principal.zestimate.high, Value('USD', 1378035))
        self.assertEqual([c.zpid for c in res.comparables],
                         ['48749422', '48690153', '48749428', '48749405', '48690145'])
        self.assertEqual([c.score for c in res.comparables], [5.0, 4.0, 3.0, 2.0, 1.0])
        self.assertEqual(res.comparables[1].zestimate.amount.value, 915000)

    def test_embedded_error_message(self):
        res = ZestimateResult.from_xml(load_data('error.xml'))
        self.assertFalse(res.message.ok)
        self.assertTrue(res.message.limit_warning)
        self.assertEqual(res.message.errors(), ['Code 2: Error: invalid or missing ZWSID parameter'])
        self.assertEqual(res.zestimate.amount, Value('', 0))


class TestDecodeErrors(unittest.TestCase):

    def test_malformed_xml(self):
        with self.assertRaises(etree.ParseError):
            ZestimateResult.from_xml(b'<zestimate><request></zestimate>')

    def test_content_after_document_element(self):
        with self.assertRaises(etree.ParseError):
            ZestimateResult.from_xml('<zestimate/>  <x/>')

    def test_repeated_element_last_wins(self):
        xml = ('<zestimate><message><text>first</text><text>second</text><code>1</code><code>4</code></message>'
               '<response><zestimate><amount currency="USD">100</amount><amount currency="EUR">200</amount>'
               '</zestimate></response></zestimate>')
        res = ZestimateResult.from_xml(xml)
        self.assertEqual(res.message.text, 'second')
        self.assertEqual(res.message.code, 4)
        self.assertEqual(res.zestimate.amount, Value('EUR', 200))

    def test_wrong_root_element(self):
        with self.assertRaises(XMLStructureError):
            CompsResult.from_xml(load_data('zestimate.xml'))

    def test_root_without_namespace(self):
        res = ChartResult.from_xml('<chart><response><url>http://x</url></response></chart>')
        self.assertEqual(res.url, 'http://x')

    def test_non_numeric_amount(self):
        xml = '<zestimate><response><zestimate><amount currency="USD">lots</amount></zestimate></response></zestimate>'
        with self.assertRaises(ValueError):
            ZestimateResult.from_xml(xml)

    def test_invalid_boolean(self):
        with self.assertRaises(ValueError):
            ZestimateResult.from_xml('<zestimate><message><limit-warning>maybe</limit-warning></message></zestimate>')

    def test_numeric_text_is_trimmed(self):
        xml = ('<zestimate><message><code> 3 </code><limit-warning> 1 </limit-warning></message>'
               '<response><localRealEstate><region id="1"><zindexOneYearChange>\n0.5\n</zindexOneYearChange>'
               '</region></localRealEstate></response></zestimate>')
        res = ZestimateResult.from_xml(xml)
        self.assertEqual(res.message.code, 3)
        self.assertTrue(res.message.limit_warning)
        self.assertEqual(res.local_real_estate, (Region(id='1', zindex_one_year_change=0.5),))


if __name__ == '__main__':
    unittest.main()
