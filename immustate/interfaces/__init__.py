"""Protocol interfaces for immustate collaborators.

The container only talks to the outside world through these seams, so a
different structural-update engine or UI binding can be plugged in without
touching the container.
"""

from .binding import Mutator, Subscriber, SubscriberBindingProtocol
from .producer import ProducerProtocol

__all__ = [
    'Mutator',
    'ProducerProtocol',
    'Subscriber',
    'SubscriberBindingProtocol',
]
