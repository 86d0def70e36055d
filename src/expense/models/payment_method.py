"""支付方式枚举"""
from enum import Enum


class PaymentMethod(str, Enum):
    """支付方式（值为显示名称）"""
    OCTOPUS = "Octopus"
    CREDIT_CARD = "Credit Card"
    ALIPAY = "Alipay"
    ALIPAY_HK = "Alipay HK"
    PAYME = "PayMe"
    FPS = "FPS"
    CASH = "Cash"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def sort_index(self) -> int:
        return list(PaymentMethod).index(self)
