"""Push notification delivery through Firebase Cloud Messaging."""

import asyncio
import logging
import typing as t

import firebase_admin
from firebase_admin import credentials, messaging

from shelfwise.core.config import SETTINGS
from shelfwise.schemas.reminder import DispatchResult, NotificationPayload
from shelfwise.services.reminder_sweep import Notifier

LOGGER = logging.getLogger(__name__)

FCM_MULTICAST_LIMIT: int = 500
FIREBASE_APP_NAME: str = "shelfwise"


class PushNotConfiguredError(Exception):
    """Raised when push delivery is requested but not enabled."""

    def __init__(self) -> None:
        super().__init__("Push notifications are not configured")


def build_multicast_message(
    tokens: t.Sequence[str], payload: NotificationPayload
) -> messaging.MulticastMessage:
    """Translate a payload into an FCM multicast message.

    Args:
        tokens (t.Sequence[str]): Device registration tokens.
        payload (NotificationPayload): The notification content.

    Returns:
        messaging.MulticastMessage: The message ready to be sent.
    """
    high: bool = payload.priority == "high"
    return messaging.MulticastMessage(
        tokens=list(tokens),
        notification=messaging.Notification(
            title=payload.title, body=payload.body
        ),
        data=dict(payload.data) or None,
        android=messaging.AndroidConfig(
            priority="high" if high else "normal"
        ),
        apns=messaging.APNSConfig(
            headers={"apns-priority": "10" if high else "5"}
        ),
    )


class FirebaseNotifier(Notifier):
    """Sends reminders to devices with the Firebase Admin SDK."""

    app: firebase_admin.App | None

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        """Initialize FirebaseNotifier.

        Args:
            app (firebase_admin.App | None):
                The Firebase app to send through, the default app if None.
        """
        self.app = app

    def _send_chunk(
        self, tokens: t.List[str], payload: NotificationPayload
    ) -> DispatchResult:
        """Blocking multicast of one chunk of at most 500 tokens."""
        response: messaging.BatchResponse = messaging.send_each_for_multicast(
            build_multicast_message(tokens, payload), app=self.app
        )
        failed: t.List[str] = [
            token
            for token, outcome in zip(tokens, response.responses)
            if not outcome.success
        ]
        return DispatchResult(
            success_count=response.success_count,
            failure_count=response.failure_count,
            failed_tokens=failed,
        )

    async def send_batch(
        self, tokens: t.Sequence[str], payload: NotificationPayload
    ) -> DispatchResult:
        """Send the payload to all tokens.

        Tokens are split into chunks FCM accepts in one multicast call.

        Args:
            tokens (t.Sequence[str]): Device registration tokens.
            payload (NotificationPayload): The notification content.

        Returns:
            DispatchResult: Per-token success and failure counts.
        """
        result: DispatchResult = DispatchResult()
        token_list: t.List[str] = list(tokens)

        for start in range(0, len(token_list), FCM_MULTICAST_LIMIT):
            chunk: t.List[str] = token_list[start : start + FCM_MULTICAST_LIMIT]
            outcome: DispatchResult = await asyncio.to_thread(
                self._send_chunk, chunk, payload
            )
            result.success_count += outcome.success_count
            result.failure_count += outcome.failure_count
            result.failed_tokens.extend(outcome.failed_tokens)

        if result.failed_tokens:
            LOGGER.debug("FCM rejected %d token(s)", len(result.failed_tokens))
        return result


def create_notifier() -> FirebaseNotifier:
    """Initialize Firebase and return a notifier bound to it.

    Uses the service account file from the settings when given, application
    default credentials otherwise.

    Returns:
        FirebaseNotifier: The notifier.
    """
    if not SETTINGS.push_enabled:
        raise PushNotConfiguredError()

    try:
        app: firebase_admin.App = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        credential: credentials.Base = (
            credentials.Certificate(str(SETTINGS.firebase_credentials_path))
            if SETTINGS.firebase_credentials_path is not None
            else credentials.ApplicationDefault()
        )
        app = firebase_admin.initialize_app(credential, name=FIREBASE_APP_NAME)
        LOGGER.info("Firebase app initialized for push notifications")

    return FirebaseNotifier(app)
