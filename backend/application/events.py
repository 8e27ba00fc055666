"""
Domain event dispatch.

Events collected by an aggregate are handed to the application logger once
the aggregate has been persisted.
"""

import logging
from typing import List

from domain.shared.base_aggregate import AggregateRoot
from domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)


def dispatch_events(aggregate: AggregateRoot) -> List[DomainEvent]:
    """Drain and log the pending events of ``aggregate``."""
    events = aggregate.clear_domain_events()
    for event in events:
        logger.info("%s %s", event.event_type, event.to_dict())
    return events
