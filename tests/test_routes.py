import unittest

from app import create_app
from drillcost.utils.result_cache import clear_cache


class RouteTests(unittest.TestCase):

    def setUp(self):
        clear_cache()
        self.app = create_app('testing')
        self.client = self.app.test_client()

        self.parameters = {
            'rig_cost_per_day': 100000,
            'trip_speed': 12,
            'stand_length': 28,
            'start_depth': 2000,
            'interval_to_drill': 1200,
            'bit_change_overhead_hours': 2
        }
        self.bits = [
            {'id': 'type-a', 'name': 'Type A', 'unit_cost': 15000, 'penetration_rate': 5, 'max_run_length': 150},
            {'id': 'type-b', 'name': 'Type B', 'unit_cost': 25000, 'penetration_rate': 5, 'max_run_length': 450},
        ]
        self.scenarios = [
            {'id': 'scenario-1', 'name': 'Scenario 1', 'bit_sequence': ['type-b', 'type-b', 'type-a']},
            {'id': 'scenario-2', 'name': 'Scenario 2', 'bit_sequence': ['type-b', 'type-b', 'type-b']},
        ]

    def test_health(self):
        response = self.client.get('/healthz')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'status': 'healthy'})

    def test_run(self):
        response = self.client.post('/api/v1/simulation/run', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'scenario': self.scenarios[1]
        })
        data = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(data['id'], 'scenario-2')
        self.assertEqual(data['status'], 'complete')
        self.assertEqual(data['final_depth'], 3200.0)
        self.assertEqual(data['steps'][0]['activity'], 'start')
        self.assertEqual(data['bits_used'], [{'name': 'Type B', 'count': 3}])
        self.assertEqual(len(data['input_hash']), 40)

    def test_run_rejects_bad_parameters(self):
        parameters = dict(self.parameters, trip_speed=0)
        response = self.client.post('/api/v1/simulation/run', json={
            'parameters': parameters,
            'bits': self.bits,
            'scenario': self.scenarios[0]
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('Trip speed must be positive', response.get_json()['details'])

    def test_run_rejects_missing_fields(self):
        response = self.client.post('/api/v1/simulation/run', json={'parameters': self.parameters})

        self.assertEqual(response.status_code, 400)
        self.assertIn('bits', response.get_json()['error'])

        response = self.client.post('/api/v1/simulation/run', data='not json')
        self.assertEqual(response.status_code, 400)

    def test_run_batch_with_sanitize(self):
        scenarios = self.scenarios + [{'id': 'scenario-3', 'name': 'Stale', 'bit_sequence': ['deleted', 'type-b']}]
        response = self.client.post('/api/v1/simulation/run-batch', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'scenarios': scenarios,
            'sanitize': True
        })
        results = response.get_json()['results']

        self.assertEqual(response.status_code, 200)
        self.assertEqual([r['status'] for r in results], ['incomplete', 'complete', 'incomplete'])
        self.assertEqual(results[2]['final_depth'], 2450.0)

    def test_compare(self):
        response = self.client.post('/api/v1/simulation/compare', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'scenarios': self.scenarios
        })
        comparison = response.get_json()['comparison']

        self.assertEqual(response.status_code, 200)
        self.assertEqual(comparison['cheapest'], 'scenario-2')
        self.assertEqual(comparison['incomplete'], ['scenario-1'])

    def test_validate(self):
        response = self.client.post('/api/v1/simulation/validate', json={
            'parameters': dict(self.parameters, stand_length=0),
            'bits': self.bits,
            'bit_sequence': ['type-a', 'ghost']
        })
        report = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertFalse(report['is_valid'])
        self.assertIn('Stand length must be positive', report['errors'])
        self.assertTrue(any('ghost' in w for w in report['warnings']))

    def test_optimize(self):
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'name': 'Auto plan'
        })
        data = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertTrue(data['found'])
        self.assertEqual(data['method'], 'dp')
        self.assertEqual(data['bit_sequence'], ['type-b', 'type-b', 'type-b'])
        self.assertEqual(data['scenario']['name'], 'Auto plan')
        self.assertEqual(data['result']['status'], 'complete')

    def test_optimize_exhaustive(self):
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'method': 'exhaustive'
        })

        self.assertEqual(response.get_json()['bit_sequence'], ['type-b', 'type-b', 'type-b'])

    def test_optimize_without_active_bits(self):
        bits = [dict(bit, active=False) for bit in self.bits]
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': bits
        })
        data = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertFalse(data['found'])
        self.assertEqual(data['bit_sequence'], [])
        self.assertIsNone(data['scenario'])

    def test_optimize_rejects_unknown_method(self):
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'method': 'greedy'
        })

        self.assertEqual(response.status_code, 400)

    def test_optimize_rejects_oversized_searches(self):
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': self.bits,
            'resolution': 1e-8
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('exceeds the limit', response.get_json()['error'])

        bits = self.bits + [{'id': 'type-s', 'name': 'Stub', 'unit_cost': 500, 'penetration_rate': 5, 'max_run_length': 10}]
        response = self.client.post('/api/v1/optimizer/optimize', json={
            'parameters': self.parameters,
            'bits': bits,
            'method': 'exhaustive',
            'max_runs': 1000
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('exceeds the limit', response.get_json()['error'])

if __name__ == '__main__':
    unittest.main()
