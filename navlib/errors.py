"""
Exceptions raised by the menu navigation engine and its collaborators
"""


class NavigationError(Exception):
    """Base class for navigation engine errors"""


class ProviderError(NavigationError):
    """
    Raised by a data provider when a domain action cannot be carried out.

    The reason is spoken to the user, so it must be short and readable.
    """

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class ConfigError(NavigationError):
    """Raised when a settings or profile file cannot be used"""
