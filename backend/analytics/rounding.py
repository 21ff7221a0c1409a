from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, digits: int = 0):
    """四舍五入（Python内置round是银行家舍入）"""
    quantum = Decimal(1).scaleb(-digits)
    result = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(result) if digits == 0 else float(result)


def safe_ratio(numerator: float, denominator: float) -> float:
    """0/0 返回 0 而不是 NaN"""
    if not denominator:
        return 0.0
    return numerator / denominator
