"""
Reference data for rate resolution: the bank product table, the digital-bank
catalog and inflation presets.

The catalog is an immutable value handed to the resolver at call time; the
built-in data below is only what `default_catalog()` returns.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ============================
# Catalog Models
# ============================
class FinancialProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    annual_rate: float  # % per year
    category: str       # "savings", "cdb", "lci_lca", "treasury", ...


class DigitalBankProduct(FinancialProduct):
    liquidity: str = "daily"  # "daily" | "maturity" | "grace_period"
    minimum_amount: float = 0.0


class DigitalBank(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    products: Tuple[DigitalBankProduct, ...] = ()


class InflationPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    annual_rate: float
    description: str = ""


class ProductCatalog(BaseModel):
    """Read-only lookup tables used by the rate resolver."""
    model_config = ConfigDict(frozen=True)

    products: Dict[str, FinancialProduct] = Field(default_factory=dict)
    banks: Dict[str, DigitalBank] = Field(default_factory=dict)
    inflation_presets: Dict[str, InflationPreset] = Field(default_factory=dict)

    def find_product(self, product_id: str) -> Optional[FinancialProduct]:
        return self.products.get(product_id)

    def find_bank_product(self, bank_id: str, product_id: str) -> Optional[DigitalBankProduct]:
        bank = self.banks.get(bank_id)
        if bank is None:
            return None
        for product in bank.products:
            if product.id == product_id:
                return product
        return None

    def find_inflation_preset(self, preset_id: str) -> Optional[InflationPreset]:
        return self.inflation_presets.get(preset_id)


# ============================
# Built-in Data
# ============================
_PRODUCTS = [
    ("savings", "Savings account", 6.17, "savings"),
    ("cdb_85", "CDB 85% CDI", 11.69, "cdb"),
    ("cdb_90", "CDB 90% CDI", 12.38, "cdb"),
    ("cdb_95", "CDB 95% CDI", 13.06, "cdb"),
    ("cdb_100", "CDB 100% CDI", 13.75, "cdb"),
    ("cdb_110", "CDB 110% CDI", 15.13, "cdb"),
    ("cdb_120", "CDB 120% CDI", 16.50, "cdb"),
    ("lci_85", "LCI 85% CDI", 11.69, "lci_lca"),
    ("lci_90", "LCI 90% CDI", 12.38, "lci_lca"),
    ("lca_95", "LCA 95% CDI", 13.06, "lci_lca"),
    ("treasury_selic", "Treasury Selic", 13.75, "treasury"),
    ("treasury_prefixed_2027", "Treasury Prefixed 2027", 12.50, "treasury"),
    ("treasury_prefixed_2031", "Treasury Prefixed 2031", 13.20, "treasury"),
    ("treasury_ipca_2035", "Treasury IPCA+ 2035", 6.75, "treasury"),
    ("treasury_ipca_2045", "Treasury IPCA+ 2045", 7.00, "treasury"),
]

# bank id -> (name, [(product id, name, rate, category, liquidity, minimum)])
_BANKS = {
    "nubank": ("Nubank", [
        ("nubank_savings", "NuConta (Savings)", 6.17, "savings", "daily", 0),
        ("nubank_cdb", "CDB Nubank", 14.20, "cdb", "daily", 1),
        ("nubank_rdb", "RDB Nubank", 15.50, "rdb", "maturity", 1000),
        ("nubank_funds", "Nubank Funds", 13.80, "fund_di", "daily", 1),
        ("nubank_treasury", "Nubank Treasury", 12.90, "treasury", "daily", 30),
    ]),
    "inter": ("Banco Inter", [
        ("inter_savings", "Inter Savings", 6.17, "savings", "daily", 0),
        ("inter_cdb", "CDB Inter", 16.80, "cdb", "daily", 100),
        ("inter_lci", "LCI Inter", 13.90, "lci_lca", "grace_period", 5000),
        ("inter_fund_di", "Inter DI Fund", 14.30, "fund_di", "daily", 100),
        ("inter_debentures", "Inter Debentures", 15.20, "debentures", "maturity", 1000),
    ]),
    "c6bank": ("C6 Bank", [
        ("c6_savings", "C6 Savings", 6.17, "savings", "daily", 0),
        ("c6_cdb", "CDB C6", 17.90, "cdb", "maturity", 500),
        ("c6_lca", "LCA C6", 15.40, "lci_lca", "maturity", 1000),
        ("c6_funds", "C6 Invest", 14.60, "fund_di", "daily", 100),
    ]),
    "pagbank": ("PagBank", [
        ("pagbank_savings", "PagBank Savings", 6.17, "savings", "daily", 0),
        ("pagbank_cdb", "CDB PagBank", 15.70, "cdb", "daily", 100),
        ("pagbank_lci", "LCI PagBank", 14.20, "lci_lca", "grace_period", 3000),
        ("pagbank_treasury", "PagBank Treasury", 13.10, "treasury", "daily", 30),
    ]),
}

_INFLATION_PRESETS = [
    ("central_bank_target", "Central bank target", 3.25, "Official inflation target"),
    ("ipca_10y", "IPCA 10-year average", 6.2, "Historical IPCA average over the last decade"),
    ("ipca_2023", "IPCA 2023", 4.62, "IPCA accumulated in 2023"),
    ("ipca_2022", "IPCA 2022", 5.79, "IPCA accumulated in 2022"),
    ("conservative", "Conservative outlook", 4.0, ""),
    ("moderate", "Moderate outlook", 5.0, ""),
    ("pessimistic", "Pessimistic outlook", 7.0, ""),
]


def default_catalog() -> ProductCatalog:
    """Build the built-in catalog."""
    products = {
        pid: FinancialProduct(id=pid, name=name, annual_rate=rate, category=cat)
        for pid, name, rate, cat in _PRODUCTS
    }
    banks = {}
    for bank_id, (bank_name, rows) in _BANKS.items():
        banks[bank_id] = DigitalBank(
            id=bank_id,
            name=bank_name,
            products=tuple(
                DigitalBankProduct(
                    id=pid, name=name, annual_rate=rate, category=cat,
                    liquidity=liquidity, minimum_amount=minimum,
                )
                for pid, name, rate, cat, liquidity, minimum in rows
            ),
        )
    presets = {
        pid: InflationPreset(id=pid, name=name, annual_rate=rate, description=desc)
        for pid, name, rate, desc in _INFLATION_PRESETS
    }
    return ProductCatalog(products=products, banks=banks, inflation_presets=presets)
