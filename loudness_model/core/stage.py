"""
Processing stage interface

Every stage of the loudness model follows the same lifecycle:

1. configure   - constructor arguments
2. initialize  - against the shape and rate of an observed input bank
3. process     - block by block, strictly in stream order
4. reset       - clear transient state between independent streams

Stages are independent classes that satisfy the Stage protocol, they do
not share a base class. Each stage owns exactly one output SignalBank.
"""

from typing import Protocol, runtime_checkable

from .signal_bank import SignalBank


class ConfigurationError(ValueError):
    """Invalid stage configuration detected during initialize()."""


@runtime_checkable
class Stage(Protocol):
    """
    Lifecycle contract of a processing stage.

    initialize() returns False (and logs the reason) on invalid
    configuration, the stage must not be used further in that case.
    process() requires a successful initialize(). The output bank's
    shape and rate are fixed by initialize() and may be relied upon by
    downstream stages.
    """

    name: str

    @property
    def initialized(self) -> bool: ...

    @property
    def output(self) -> SignalBank: ...

    def initialize(self, input_bank: SignalBank) -> bool: ...

    def process(self, input_bank: SignalBank) -> None: ...

    def reset(self) -> None: ...
