import unittest

from drillcost.calculators.comparison.analyzer import compare_scenarios
from drillcost.calculators.simulation.simulator import simulate
from drillcost.models.drilling import BitType, DrillingParameters


class ComparisonTests(unittest.TestCase):

    def setUp(self):
        self.params = DrillingParameters(100000.0, 12.0, 28.0, 2000.0, 1200.0, 2.0)
        self.bits = [
            BitType('type-a', 'Type A', 15000.0, 5.0, 150.0),
            BitType('type-b', 'Type B', 25000.0, 5.0, 450.0),
            BitType('type-c', 'Type C', 40000.0, 8.0, 600.0),
        ]

    def scenario(self, scenario_id, sequence):
        return simulate(self.params, self.bits, sequence, scenario_id=scenario_id, name=scenario_id)

    def test_empty(self):
        self.assertEqual(compare_scenarios([]), {'count': 0})

    def test_ranking(self):
        results = [
            self.scenario('all-b', ['type-b'] * 3),
            self.scenario('short', ['type-b', 'type-b', 'type-a']),
            self.scenario('all-c', ['type-c'] * 2),
        ]
        comparison = compare_scenarios(results)

        self.assertEqual(comparison['count'], 3)
        self.assertEqual(comparison['complete'], ['all-b', 'all-c'])
        self.assertEqual(comparison['incomplete'], ['short'])
        self.assertEqual([r['id'] for r in comparison['ranking']], ['all-c', 'all-b'])
        self.assertEqual(comparison['cheapest'], 'all-c')
        self.assertEqual(comparison['fastest'], 'all-c')
        self.assertAlmostEqual(comparison['savings_vs_worst'],
                               results[0].total_cost - results[2].total_cost)

        stats = comparison['statistics']['total_cost']
        self.assertAlmostEqual(stats['min'], min(r.total_cost for r in results))
        self.assertAlmostEqual(stats['max'], max(r.total_cost for r in results))
        self.assertIsInstance(stats['average'], float)

    def test_nothing_complete(self):
        comparison = compare_scenarios([self.scenario('empty', []), self.scenario('one', ['type-a'])])

        self.assertIsNone(comparison['cheapest'])
        self.assertIsNone(comparison['fastest'])
        self.assertEqual(comparison['ranking'], [])
        self.assertEqual(comparison['savings_vs_worst'], 0.0)

if __name__ == '__main__':
    unittest.main()
