"""
Unit tests for company name to symbol resolution.
"""

from portfolio_dashboard.services.holdings import (
    KNOWN_SYMBOLS,
    SymbolResolver,
    first_word_symbol,
)


class TestFirstWordSymbol:
    """Test fallback heuristic"""

    def test_first_word_uppercased(self):
        assert first_word_symbol("Wipro Limited") == "WIPRO"

    def test_single_word(self):
        assert first_word_symbol("itc") == "ITC"

    def test_empty_name(self):
        assert first_word_symbol("   ") == ""


class TestSymbolResolver:
    """Test known-name mapping with fallback"""

    def test_known_names(self):
        resolver = SymbolResolver()

        for name, symbol in KNOWN_SYMBOLS.items():
            assert resolver.resolve(name) == symbol

    def test_tcs_maps_to_tata(self):
        assert SymbolResolver()("Tata Consultancy Services") == "TATA"

    def test_unknown_name_uses_fallback(self):
        assert SymbolResolver().resolve("Bajaj Finance") == "BAJAJ"

    def test_overrides_replace_defaults(self):
        resolver = SymbolResolver(overrides={"Tata Consultancy Services": "TCS"})

        assert resolver.resolve("Tata Consultancy Services") == "TCS"
        assert resolver.resolve("Infosys") == "INFY"

    def test_custom_fallback(self):
        resolver = SymbolResolver(fallback=lambda name: name.replace(" ", "").upper())

        assert resolver.resolve("Bajaj Finance") == "BAJAJFINANCE"

    def test_without_defaults(self):
        resolver = SymbolResolver(include_defaults=False)

        assert resolver.resolve("HDFC Bank") == "HDFC"
