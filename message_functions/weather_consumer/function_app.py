"""
Weather Consumer Azure Function.

Service Bus queue-triggered functions for the weather updates queue and
its dead-letter sub-queue.

Architecture:
    Service Bus Queue → Weather Consumer → (complete | dead-letter | redeliver)
    Service Bus DLQ   → Dead Letter Logger → (complete)

Settlement:
    - Success completes automatically when the function returns.
    - Malformed bodies are dead-lettered through message_actions.
    - Processing errors are raised; Service Bus redelivers the message until
      the queue's maxDeliveryCount and then dead-letters it itself.

Source: message_functions/weather_consumer/function_app.py
Editable: Yes - This is the runtime Azure Function code
"""
import os
import sys
import logging
import time
from datetime import datetime, timezone

import azure.functions as func
import azurefunctions.extensions.bindings.servicebus as servicebus

# Handle import path for shared module
try:
    from _shared.env_utils import SERVICE_BUS_CONNECTION_SETTING, QUEUE_NAME_SETTING
    from _shared.processing import DeliveryKind, DeliveryOutcome, classify_delivery
except ModuleNotFoundError:
    _func_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _func_dir not in sys.path:
        sys.path.insert(0, _func_dir)
    from _shared.env_utils import SERVICE_BUS_CONNECTION_SETTING, QUEUE_NAME_SETTING
    from _shared.processing import DeliveryKind, DeliveryOutcome, classify_delivery


# Binding expressions resolved from app settings by the Functions host
QUEUE_NAME_BINDING = f"%{QUEUE_NAME_SETTING}%"
DEAD_LETTER_QUEUE_BINDING = f"{QUEUE_NAME_BINDING}/$deadletterqueue"

DEAD_LETTER_DELAY_SECONDS = 0.05

# Create Blueprint for registration by main function_app.py
bp = func.Blueprint()


def read_body(message) -> str:
    """Return the message body as text (data bodies arrive as byte sections)."""
    body = message.body
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        data = bytes(body)
    else:
        data = b"".join(body)
    return data.decode("utf-8", errors="replace")


def _format_properties(properties) -> str:
    def _text(value):
        return value.decode("utf-8") if isinstance(value, bytes) else value

    return ", ".join(f"{_text(k)}={_text(v)}" for k, v in properties.items())


def _elapsed_ms(since) -> float:
    if since is None:
        return 0.0
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return (datetime.now(timezone.utc) - since).total_seconds() * 1000


def settle(message, message_actions, outcome: DeliveryOutcome) -> None:
    """
    Apply a delivery outcome to the received message.

    Raises:
        Exception: The carried processing error when the outcome is retryable
    """
    if outcome.terminal:
        logging.error(
            f"Dead-lettering message {message.message_id}: {outcome.reason} - {outcome.description}"
        )
        message_actions.deadletter(
            message,
            deadletter_reason=outcome.reason,
            deadletter_error_description=outcome.description,
        )
        return

    if outcome.retryable:
        logging.error(
            f"Error processing weather update message {message.message_id}: {outcome.error} "
            f"(delivery {message.delivery_count}, will be redelivered)"
        )
        raise outcome.error

    logging.info(
        f"Weather update processed successfully. MessageId: {message.message_id}, "
        f"ProcessingTime: {_elapsed_ms(message.enqueued_time_utc):.0f}ms"
    )


@bp.function_name(name="ProcessWeatherUpdate")
@bp.service_bus_queue_trigger(
    arg_name="message",
    queue_name=QUEUE_NAME_BINDING,
    connection=SERVICE_BUS_CONNECTION_SETTING
)
def process_weather_update(
    message: servicebus.ServiceBusReceivedMessage,
    message_actions: servicebus.ServiceBusMessageActions
) -> None:
    """
    Process one weather update delivery.

    Malformed messages are dead-lettered; processing errors propagate
    so that Service Bus redelivers the message.
    """
    logging.info(
        f"Processing weather update message. MessageId: {message.message_id}, "
        f"DeliveryCount: {message.delivery_count}"
    )
    logging.info(
        f"Message metadata - Subject: {message.subject}, ContentType: {message.content_type}, "
        f"EnqueuedTime: {message.enqueued_time_utc}"
    )

    body = read_body(message)

    if message.application_properties:
        logging.info(f"Message properties: {_format_properties(message.application_properties)}")

    outcome = classify_delivery(body)

    if outcome.kind == DeliveryKind.INVALID_FORMAT:
        logging.error(
            f"Failed to deserialize weather update message. MessageId: {message.message_id}, Body: {body}"
        )
    elif outcome.kind == DeliveryKind.PARSE_ERROR:
        logging.error(f"JSON parsing error for message {message.message_id}: {outcome.description}")

    settle(message, message_actions, outcome)


@bp.function_name(name="ProcessDeadLetterMessages")
@bp.service_bus_queue_trigger(
    arg_name="message",
    queue_name=DEAD_LETTER_QUEUE_BINDING,
    connection=SERVICE_BUS_CONNECTION_SETTING
)
def process_dead_letter_messages(message: servicebus.ServiceBusReceivedMessage) -> None:
    """
    Log a dead-lettered weather update for investigation.

    Returning completes (removes) the message from the sub-queue. Errors are
    raised so the message stays in the sub-queue.
    """
    try:
        logging.warning(
            f"Processing dead letter message. MessageId: {message.message_id}, "
            f"DeadLetterReason: {message.dead_letter_reason}, "
            f"DeadLetterDescription: {message.dead_letter_error_description}"
        )

        logging.info(f"Dead letter message body: {read_body(message)}")

        time.sleep(DEAD_LETTER_DELAY_SECONDS)

        logging.info(f"Dead letter message logged for investigation. MessageId: {message.message_id}")

    except Exception as e:
        logging.error(f"Error processing dead letter message {message.message_id}: {e}")
        raise
