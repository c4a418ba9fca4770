from .aggregate import AggregateRoot as AggregateRoot
