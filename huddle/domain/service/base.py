"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold logic that spans several entities, such as keeping
    post and comment counters in step with comment writes.
    """

    pass
