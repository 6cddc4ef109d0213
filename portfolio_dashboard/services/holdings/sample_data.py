"""
Built-in sample portfolio used when no holdings file is configured.

Rows mirror the spreadsheet layout read by SpreadsheetHoldingsSource.
"""

SAMPLE_HOLDING_ROWS: list[dict[str, object]] = [
    {
        "Particulars": "Reliance Industries",
        "Purchase Price": 2400,
        "Quantity": 100,
        "Investment": 240000,
        "Portfolio (%)": 15.5,
        "NSE/BSE": "NSE",
        "Sector": "Oil & Gas",
    },
    {
        "Particulars": "Tata Consultancy Services",
        "Purchase Price": 3800,
        "Quantity": 50,
        "Investment": 190000,
        "Portfolio (%)": 12.3,
        "NSE/BSE": "NSE",
        "Sector": "Technology",
    },
    {
        "Particulars": "HDFC Bank",
        "Purchase Price": 1600,
        "Quantity": 100,
        "Investment": 160000,
        "Portfolio (%)": 10.3,
        "NSE/BSE": "NSE",
        "Sector": "Financial Services",
    },
    {
        "Particulars": "Infosys",
        "Purchase Price": 1400,
        "Quantity": 100,
        "Investment": 140000,
        "Portfolio (%)": 9.0,
        "NSE/BSE": "NSE",
        "Sector": "Technology",
    },
    {
        "Particulars": "ICICI Bank",
        "Purchase Price": 900,
        "Quantity": 150,
        "Investment": 135000,
        "Portfolio (%)": 8.7,
        "NSE/BSE": "NSE",
        "Sector": "Financial Services",
    },
    {
        "Particulars": "Hindustan Unilever",
        "Purchase Price": 2800,
        "Quantity": 50,
        "Investment": 140000,
        "Portfolio (%)": 9.0,
        "NSE/BSE": "NSE",
        "Sector": "Consumer Goods",
    },
    {
        "Particulars": "ITC",
        "Purchase Price": 400,
        "Quantity": 300,
        "Investment": 120000,
        "Portfolio (%)": 7.7,
        "NSE/BSE": "NSE",
        "Sector": "Consumer Goods",
    },
    {
        "Particulars": "State Bank of India",
        "Purchase Price": 600,
        "Quantity": 200,
        "Investment": 120000,
        "Portfolio (%)": 7.7,
        "NSE/BSE": "NSE",
        "Sector": "Financial Services",
    },
    {
        "Particulars": "Bharti Airtel",
        "Purchase Price": 1100,
        "Quantity": 100,
        "Investment": 110000,
        "Portfolio (%)": 7.1,
        "NSE/BSE": "NSE",
        "Sector": "Telecommunications",
    },
    {
        "Particulars": "Axis Bank",
        "Purchase Price": 1000,
        "Quantity": 100,
        "Investment": 100000,
        "Portfolio (%)": 6.5,
        "NSE/BSE": "NSE",
        "Sector": "Financial Services",
    },
]
