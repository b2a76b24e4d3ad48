import unittest

from drillcost.models.drilling import BitSequenceEntry, BitType, DrillingParameters
from drillcost.utils.validation import (
    InvalidParameterError, ensure_valid_parameters, sequence_capacity, validate_parameters
)


class ValidationTests(unittest.TestCase):

    def setUp(self):
        self.params = DrillingParameters(100000.0, 12.0, 28.0, 2000.0, 1200.0, 2.0)
        self.bits = [
            BitType('type-a', 'Type A', 15000.0, 5.0, 150.0),
            BitType('type-b', 'Type B', 25000.0, 5.0, 450.0),
        ]

    def test_valid_inputs(self):
        result = validate_parameters(self.params, self.bits, ['type-b', 'type-b', 'type-b'])

        self.assertTrue(result['is_valid'])
        self.assertEqual(result['errors'], [])
        self.assertEqual(result['warnings'], [])

    def test_degenerate_parameters(self):
        params = DrillingParameters(-1.0, 0.0, 0.0, -5.0, -10.0, -1.0)
        result = validate_parameters(params)

        self.assertFalse(result['is_valid'])
        self.assertEqual(len(result['errors']), 6)
        self.assertIn('Trip speed must be positive', result['errors'])
        self.assertIn('Stand length must be positive', result['errors'])

    def test_bit_errors_and_duplicate_ids(self):
        bits = [
            BitType('type-a', 'Type A', -1.0, 0.0, 0.0),
            BitType('type-a', 'Type A2', 1.0, 1.0, 1.0),
        ]
        result = validate_parameters(self.params, bits)

        self.assertFalse(result['is_valid'])
        self.assertIn('Bit type-a: unit cost must not be negative', result['errors'])
        self.assertIn('Bit type-a: penetration rate must be positive', result['errors'])
        self.assertIn('Bit type-a: max run length must be positive', result['errors'])
        self.assertIn('Bit id type-a is used by 2 bit types', result['errors'])

    def test_warnings(self):
        bits = [
            BitType('a1', 'Same', 1.0, 1.0, 100.0, active=False),
            BitType('a2', 'Same', 1.0, 1.0, 100.0, active=False),
        ]
        result = validate_parameters(self.params, bits, ['a1', 'ghost'])

        self.assertTrue(result['is_valid'])
        self.assertEqual(len(result['warnings']), 4)
        self.assertTrue(any('merged' in w for w in result['warnings']))
        self.assertTrue(any('No active bit types' in w for w in result['warnings']))
        self.assertTrue(any('ghost' in w for w in result['warnings']))
        self.assertTrue(any('capacity' in w for w in result['warnings']))

    def test_ensure_valid_parameters(self):
        ensure_valid_parameters(self.params, self.bits)

        params = DrillingParameters(100000.0, 0.0, 28.0, 2000.0, 1200.0, 2.0)
        with self.assertRaises(InvalidParameterError) as ctx:
            ensure_valid_parameters(params, [BitType('x', 'X', 1.0, 0.0, 1.0)])

        self.assertEqual(len(ctx.exception.errors), 2)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_sequence_capacity(self):
        sequence = ['type-b', BitSequenceEntry('type-a', actual_distance=100.0), 'ghost', None]

        self.assertEqual(sequence_capacity(self.bits, sequence), 550.0)

if __name__ == '__main__':
    unittest.main()
