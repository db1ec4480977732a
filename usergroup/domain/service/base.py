"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the account rules that span the Account
    aggregate and its provider linkages.
    """

    pass
