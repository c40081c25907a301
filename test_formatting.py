import unittest

from formatting import format_currency, format_percent


class TestFormatting(unittest.TestCase):
    def test_currency_rounds_and_groups(self):
        self.assertEqual(format_currency(1_234_567.5), "£1,234,568")
        self.assertEqual(format_currency(999.49), "£999")
        self.assertEqual(format_currency(0.4), "£0")
        self.assertEqual(format_currency(2.5), "£3")

    def test_currency_negative(self):
        self.assertEqual(format_currency(-1_234.6), "£-1,235")
        self.assertEqual(format_currency(-2.5), "£-2")

    def test_currency_symbol(self):
        self.assertEqual(format_currency(1500, symbol="€"), "€1,500")

    def test_not_finite(self):
        self.assertEqual(format_currency(float("nan")), "N/A")
        self.assertEqual(format_percent(float("inf")), "N/A")

    def test_percent(self):
        self.assertEqual(format_percent(1.23456), "1.23%")
        self.assertEqual(format_percent(0.5, 1), "0.5%")
        self.assertEqual(format_percent(0), "0.00%")


if __name__ == '__main__':
    unittest.main()
