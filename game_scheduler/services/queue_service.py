"""
Cloud Tasks queue service

Wraps the Cloud Tasks client: idempotent queue creation, task creation, and
connecting to either the local emulator or the production service.
"""
from __future__ import annotations

import logging
from datetime import datetime

import grpc
from google.api_core.exceptions import AlreadyExists, GoogleAPIError
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import tasks_v2
from google.cloud.tasks_v2.services.cloud_tasks.transports import CloudTasksGrpcTransport
from google.protobuf import timestamp_pb2

from game_scheduler.schemas import RunConfig
from game_scheduler.utils.timezone import format_rfc3339


logger = logging.getLogger(__name__)


class QueueCreationError(RuntimeError):
    """Raised when the queue could not be created for a reason other than it existing"""
    pass


class TransportConnectionError(RuntimeError):
    """Raised when the Cloud Tasks service cannot be reached"""
    pass


def location_path(project_id: str, location: str) -> str:
    return f"projects/{project_id}/locations/{location}"


def queue_path(project_id: str, location: str, queue_name: str) -> str:
    return f"{location_path(project_id, location)}/queues/{queue_name}"


class QueueManager:
    """Ensures the destination queue exists. Never lists or deletes queues."""

    def __init__(self, client: tasks_v2.CloudTasksClient):
        self._client = client

    def ensure_queue(self, project_id: str, location: str, queue_name: str) -> bool:
        """
        Create the queue if it does not exist yet.

        Returns:
            True if the queue was created, False if it already existed

        Raises:
            QueueCreationError: On any other service error
        """
        name = queue_path(project_id, location, queue_name)
        try:
            self._client.create_queue(
                parent=location_path(project_id, location),
                queue=tasks_v2.Queue(name=name),
            )
        except AlreadyExists:
            logger.info("Queue %s already exists, skipping creation", queue_name)
            return False
        except (GoogleAPIError, grpc.RpcError) as exc:
            raise QueueCreationError(f"failed to create queue {name}: {exc}") from exc

        logger.info("Created queue: %s", name)
        return True


class CloudTasksTransport:
    """Task transport bound to a single queue."""

    def __init__(
        self,
        client: tasks_v2.CloudTasksClient,
        project_id: str,
        location: str,
        queue_name: str,
        *,
        channel: grpc.Channel | None = None,
    ):
        self._client = client
        self._channel = channel
        self.project_id = project_id
        self.location = location
        self.queue_name = queue_name
        self.queue_manager = QueueManager(client)

    @property
    def queue_path(self) -> str:
        return queue_path(self.project_id, self.location, self.queue_name)

    def ensure_queue(self) -> bool:
        return self.queue_manager.ensure_queue(self.project_id, self.location, self.queue_name)

    def create_task(self, target_url: str, payload: bytes, schedule_time: datetime) -> str:
        """
        Create an HTTP POST task that fires at ``schedule_time``.

        Returns:
            The name assigned to the task by the service

        Raises:
            google.api_core.exceptions.GoogleAPIError: If the service rejects the task
        """
        timestamp = timestamp_pb2.Timestamp()
        timestamp.FromDatetime(schedule_time)

        task = tasks_v2.Task(
            http_request=tasks_v2.HttpRequest(
                http_method=tasks_v2.HttpMethod.POST,
                url=target_url,
                headers={"Content-Type": "application/json"},
                body=payload,
            ),
            schedule_time=timestamp,
        )

        created = self._client.create_task(parent=self.queue_path, task=task)
        logger.info(
            "Created task %s, scheduled for %s",
            created.name,
            format_rfc3339(schedule_time),
        )
        return created.name

    def close(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None

    def __enter__(self) -> "CloudTasksTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def connect_to_tasks_service(config: RunConfig) -> CloudTasksTransport:
    """
    Connect to Cloud Tasks (local emulator unless production is requested).

    Raises:
        TransportConnectionError: If the emulator is unreachable or credentials are missing
    """
    if config.production:
        logger.info("Connecting to production Cloud Tasks service")
        try:
            client = tasks_v2.CloudTasksClient()
        except DefaultCredentialsError as exc:
            raise TransportConnectionError(
                f"failed to connect to Cloud Tasks - no usable credentials: {exc}"
            ) from exc
        return CloudTasksTransport(client, config.project_id, config.location, config.queue_name)

    endpoint = config.emulator_host
    logger.info("Connecting to local Cloud Tasks emulator at %s", endpoint)

    channel = grpc.insecure_channel(endpoint)
    try:
        grpc.channel_ready_future(channel).result(timeout=config.emulator_connect_timeout_sec)
    except grpc.FutureTimeoutError as exc:
        channel.close()
        raise TransportConnectionError(
            f"failed to connect to local Cloud Tasks emulator at {endpoint} - "
            "ensure the emulator is running"
        ) from exc

    client = tasks_v2.CloudTasksClient(transport=CloudTasksGrpcTransport(channel=channel))
    return CloudTasksTransport(
        client,
        config.project_id,
        config.location,
        config.queue_name,
        channel=channel,
    )
