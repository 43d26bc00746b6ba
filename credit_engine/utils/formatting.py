"""Display formatting for breakdown values"""


def format_percent(value: float) -> str:
    """76.666 -> '76.67%'"""
    return f"{value:.2f}%"


def format_currency(amount: float) -> str:
    """5000 -> '$5,000', 1234.5 -> '$1,234.50'"""
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def format_out_of_hundred(value: int) -> str:
    return f"{value}/100"


def format_years(years: int) -> str:
    return f"{years} years"
