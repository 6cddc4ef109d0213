"""
Reference market data for the simulated quote source.

Base values per NSE symbol; the simulator adds random variation on top.
"""

from ...models.quote import Quote

REFERENCE_QUOTES: dict[str, Quote] = {
    quote.symbol: quote
    for quote in (
        Quote(symbol="RELIANCE", current_price=2450.75, pe_ratio=18.5, latest_earnings=125.50),
        Quote(symbol="TATA", current_price=3850.25, pe_ratio=25.2, latest_earnings=145.75),
        Quote(symbol="HDFCBANK", current_price=1650.50, pe_ratio=15.8, latest_earnings=95.25),
        Quote(symbol="INFY", current_price=1450.80, pe_ratio=22.1, latest_earnings=85.30),
        Quote(symbol="ICICIBANK", current_price=950.25, pe_ratio=16.2, latest_earnings=65.40),
        Quote(symbol="HINDUNILVR", current_price=2850.90, pe_ratio=28.5, latest_earnings=110.20),
        Quote(symbol="ITC", current_price=420.75, pe_ratio=20.1, latest_earnings=25.80),
        Quote(symbol="SBIN", current_price=650.40, pe_ratio=12.5, latest_earnings=45.60),
        Quote(symbol="BHARTIARTL", current_price=1150.30, pe_ratio=19.8, latest_earnings=75.90),
        Quote(symbol="AXISBANK", current_price=1050.60, pe_ratio=14.2, latest_earnings=55.30),
    )
}
