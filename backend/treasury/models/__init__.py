from treasury.models.payment import PaymentRow

__all__ = ["PaymentRow"]
