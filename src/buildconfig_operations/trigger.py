"""Webhook triggers for a BuildConfig."""

from __future__ import annotations

import logging

from buildconfig_operations.context import ParameterContext
from buildconfig_operations.errors import ConfigurationError
from buildconfig_operations.models import WebHookTrigger, to_json
from buildconfig_operations.transport import RequestExecutor, join_url

logger = logging.getLogger(__name__)

WEBHOOKS = "webhooks"

# Sent for every trigger type, including generic webhooks; the server only
# inspects it on the github endpoint.
EVENT_HEADER = "X-Github-Event"
EVENT_PUSH = "push"


class TriggerInvoker:
    """Posts a webhook payload to ``<resource>/webhooks/<secret>/<type>``."""

    def __init__(
        self,
        executor: RequestExecutor,
        resource_url: str,
        context: ParameterContext,
    ) -> None:
        self._executor = executor
        self._resource_url = resource_url
        self._context = context

    def trigger_url(self) -> str:
        """Return the webhook URL.

        Raises:
            ConfigurationError: If the secret or trigger type is missing.
        """

        if not self._context.secret:
            raise ConfigurationError("A webhook secret is required to trigger a build")
        if not self._context.trigger_type:
            raise ConfigurationError("A trigger type is required to trigger a build")
        return join_url(
            self._resource_url, WEBHOOKS, self._context.secret, self._context.trigger_type
        )

    def trigger(self, webhook_trigger: WebHookTrigger) -> None:
        url = self.trigger_url()
        logger.info("Triggering build", extra={"trigger_type": self._context.trigger_type})
        self._executor.request(
            "POST",
            url,
            data=to_json(webhook_trigger),
            headers={"Content-Type": "application/json", EVENT_HEADER: EVENT_PUSH},
        )
