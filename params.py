class Params:
    # Default investment plan
    starting_portfolio = 50_000
    monthly_contribution = 500
    expected_return = 7.0  # % per year
    years = 20
    trades_per_year = 12
    investment_type = "mixed"
    international_trading = False
    required_accounts = ("isa",)
    current_fee_percentage = None  # falls back to default_current_fee

    # Allowed values
    trade_cadences = (1, 4, 12, 24, 52)  # annual, quarterly, monthly, bi-weekly, weekly
    investment_types = ("funds", "etfs", "shares", "mixed")
    account_types = ("isa", "sipp", "trading")

    # Modeling assumptions
    mixed_etf_share = 0.5  # "mixed" = 50% ETFs, 50% funds
    international_share = 0.5  # share of contributions that pays FX
    regular_investing_trades = 12  # monthly regular investing

    # Reference benchmarks (% per year)
    industry_average_fee = 0.5
    default_current_fee = 0.75

    # Display
    currency_symbol = "£"
    percent_decimals = 2

    # Files
    catalog_path = "platforms.json"
    log_file = "fee_analysis.log"
