class CurrencyException(Exception):
    pass


class ValidationError(CurrencyException):
    pass


class InvalidAmountError(ValidationError):
    pass


class InvalidRateError(ValidationError):
    pass


class InvalidCurrencyError(ValidationError):
    pass


class CurrencyNotFoundError(CurrencyException):
    pass


class PersistenceError(CurrencyException):
    pass


class CacheError(CurrencyException):
    pass


class UserAlreadyExistsError(CurrencyException):
    pass


class AuthenticationError(CurrencyException):
    pass
