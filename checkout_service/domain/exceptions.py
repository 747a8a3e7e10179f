class DomainException(Exception):
    pass


class OrderNotFoundError(DomainException):
    pass


class CardNotFoundError(DomainException):
    pass


class MaxCardsExceededError(DomainException):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"User has reached the maximum limit of {limit} cards.")


class DuplicateCardNumberError(DomainException):
    def __init__(self):
        super().__init__("Card number already exists for this user.")


class CardExpiredError(DomainException):
    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} is expired")


class ExpirationDateNotInFutureError(DomainException):
    def __init__(self, expiration_date):
        self.expiration_date = expiration_date
        super().__init__("Expiration date must be in the future")
