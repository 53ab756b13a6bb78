from naijacalc.core.reference_data.tax_rules import NIGERIA_PAYE_2024, PAYERules, TaxBracket, get_tax_rules
from naijacalc.core.reference_data.nigeria_cpi import NIGERIA_CPI, CPIDataPoint, CPISeries

__all__ = [
    "NIGERIA_PAYE_2024",
    "PAYERules",
    "TaxBracket",
    "get_tax_rules",
    "NIGERIA_CPI",
    "CPIDataPoint",
    "CPISeries",
]
