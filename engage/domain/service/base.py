"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the engagement rules that span more than one
    entity: a like touches the ledger and a counter, a reply touches the
    new comment and its parent.
    """

    pass
