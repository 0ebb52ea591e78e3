"""CLI state container."""

import typing as t

from ..config.settings import Settings
from ..domain.retry import RetryPolicy
from ..events import BaseEmitter
from ..ingest import (
    BatchQueueManager,
    ErrorClassifier,
    RetryStrategy,
    TokenBucketRateLimiter,
    TransferService,
)

ManagerFactory = t.Callable[..., BatchQueueManager]
TransferServiceFactory = t.Callable[..., TransferService]


class CLIState:
    """Application state container for CLI commands.

    Holds Settings plus factories for the objects commands need, so tests
    can swap in mocks without touching the commands.
    """

    def __init__(
        self,
        settings: Settings,
        manager_factory: ManagerFactory | None = None,
        transfer_factory: TransferServiceFactory | None = None,
    ):
        self.settings = settings
        self._manager_factory = manager_factory or self._default_manager
        self._transfer_factory = transfer_factory or self._default_transfer_service

    def retry_policy(self, extra_network_prefixes: t.Sequence[str] = ()) -> RetryPolicy:
        """Retry policy from settings, optionally with more network mounts."""
        return RetryPolicy(
            network_mount_prefixes=(
                *self.settings.network_mount_prefixes,
                *extra_network_prefixes,
            ),
            local_max_retries=self.settings.local_max_retries,
            network_max_retries=self.settings.network_max_retries,
            transient_base_delay_ms=self.settings.transient_base_delay_ms,
            network_base_delay_ms=self.settings.network_base_delay_ms,
        )

    def create_manager(self, **kwargs: t.Any) -> BatchQueueManager:
        return self._manager_factory(**kwargs)

    def create_transfer_service(self, **kwargs: t.Any) -> TransferService:
        return self._transfer_factory(**kwargs)

    def create_rate_limiter(self) -> TokenBucketRateLimiter:
        return TokenBucketRateLimiter(
            capacity=self.settings.rate_limit_capacity,
            refill_rate=self.settings.rate_limit_per_second,
        )

    def _default_manager(self, emitter: BaseEmitter | None = None) -> BatchQueueManager:
        return BatchQueueManager(self.settings.state_file, emitter=emitter)

    def _default_transfer_service(
        self,
        network_prefixes: t.Sequence[str] = (),
        emitter: BaseEmitter | None = None,
    ) -> TransferService:
        classifier = ErrorClassifier(self.retry_policy(network_prefixes))
        return TransferService(
            retry_strategy=RetryStrategy(classifier, emitter=emitter),
            classifier=classifier,
        )
