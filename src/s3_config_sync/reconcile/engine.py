"""Reconciliation engine: one run from inputs to diff report.

``ReconcileEngine.run`` walks a fixed sequence of stages:

1. Validate that every required input is non-empty.
2. Resolve the source and destination formats and build a codec for each.
3. Verify that the bucket exists.
4. Load the published configuration (empty when the object is absent).
5. Load the desired configuration from the local source file.
6. Diff published against desired.
7. Publish the desired configuration, unless this is a dry run.
8. Return the ``DiffReport``.

Each stage is a separate method that returns its result, so stages can
be exercised on their own. Any exception ends the run; nothing is retried
and nothing needs rolling back because the publish write is the only
mutation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from s3_config_sync.config import REQUIRED_FIELDS, RunInputs
from s3_config_sync.errors import (
    ContainerNotFoundError,
    InvalidInputError,
    ParseError,
)
from s3_config_sync.file_handler import read_source_async
from s3_config_sync.formats import Configuration, FormatCodec, resolve_format
from s3_config_sync.reconcile.diff import diff_configs
from s3_config_sync.reconcile.models import DiffReport
from s3_config_sync.store.base import RemoteStore

logger = logging.getLogger(__name__)


class ReconcileStage(str, Enum):
    """Stages of a run, in execution order."""

    VALIDATING = "validating"
    RESOLVING_FORMATS = "resolving_formats"
    VERIFYING_CONTAINER = "verifying_container"
    LOADING_PRIOR_STATE = "loading_prior_state"
    LOADING_DESIRED_STATE = "loading_desired_state"
    COMPUTING_DIFF = "computing_diff"
    PUBLISHING = "publishing"
    DONE = "done"


@dataclass(frozen=True)
class Codecs:
    """Codec pair for one run; the two sides may use different formats."""

    source: FormatCodec
    destination: FormatCodec


def validate_inputs(inputs: RunInputs) -> None:
    """Reject the first required input that is empty or blank.

    Raises:
        InvalidInputError: Naming the offending field.
    """
    for field in REQUIRED_FIELDS:
        value = getattr(inputs, field)
        if value is None or not str(value).strip():
            raise InvalidInputError(field)


class ReconcileEngine:
    """Reconcile a local configuration file against its published copy.

    Args:
        inputs: Resolved run inputs.
        store: Remote object store holding the published configuration.
        read_source: Coroutine function returning the text of a local
            file; defaults to ``read_source_async``.
    """

    def __init__(
        self,
        inputs: RunInputs,
        store: RemoteStore,
        read_source: Callable[[str], Awaitable[str]] = read_source_async,
    ) -> None:
        self.inputs = inputs
        self.store = store
        self.read_source = read_source
        self.stage = ReconcileStage.VALIDATING

    def _enter(self, stage: ReconcileStage) -> None:
        self.stage = stage
        logger.debug("Stage: %s", stage.value)

    @property
    def destination_uri(self) -> str:
        return f"s3://{self.inputs.bucket}/{self.inputs.destination}"

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    async def run(self) -> DiffReport:
        """Execute one reconciliation.

        Returns:
            The differences between published and desired configuration,
            whether or not they were published.
        """
        self._enter(ReconcileStage.VALIDATING)
        self.validate()

        self._enter(ReconcileStage.RESOLVING_FORMATS)
        codecs = self.resolve_codecs()

        self._enter(ReconcileStage.VERIFYING_CONTAINER)
        await self.verify_container()

        self._enter(ReconcileStage.LOADING_PRIOR_STATE)
        prior = await self.load_prior_config(codecs.destination)

        self._enter(ReconcileStage.LOADING_DESIRED_STATE)
        desired = await self.load_desired_config(codecs.source)

        self._enter(ReconcileStage.COMPUTING_DIFF)
        report = diff_configs(prior, desired)
        logger.info("Computed differences: %s", report.summary())

        if self.inputs.dry_run:
            logger.info("Dry run: not publishing to %s", self.destination_uri)
        else:
            self._enter(ReconcileStage.PUBLISHING)
            await self.publish(desired, codecs.destination)

        self._enter(ReconcileStage.DONE)
        return report

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def validate(self) -> None:
        validate_inputs(self.inputs)

    def resolve_codecs(self) -> Codecs:
        """Build codecs from the source path and destination key extensions."""
        codecs = Codecs(
            source=FormatCodec(resolve_format(self.inputs.source)),
            destination=FormatCodec(resolve_format(self.inputs.destination)),
        )
        logger.debug(
            "Source format: %s, destination format: %s",
            codecs.source.format.value,
            codecs.destination.format.value,
        )
        return codecs

    async def verify_container(self) -> None:
        """Raise ``ContainerNotFoundError`` if the bucket is missing."""
        if not await self.store.container_exists(self.inputs.bucket):
            raise ContainerNotFoundError(self.inputs.bucket)

    async def load_prior_config(self, codec: FormatCodec) -> Configuration:
        """Return the published configuration, or ``{}`` if none exists yet."""
        bucket, key = self.inputs.bucket, self.inputs.destination
        if not await self.store.object_exists(bucket, key):
            logger.info(
                "No published configuration at %s, starting from empty",
                self.destination_uri,
            )
            return {}

        data = await self.store.read_object(bucket, key)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"Published configuration {self.destination_uri} is not UTF-8: {exc}"
            ) from exc
        return codec.parse(text, origin=self.destination_uri)

    async def load_desired_config(self, codec: FormatCodec) -> Configuration:
        """Read and parse the local source file."""
        text = await self.read_source(self.inputs.source)
        return codec.parse(text, origin=self.inputs.source)

    async def publish(
        self, desired: Configuration, codec: FormatCodec
    ) -> None:
        """Replace the published configuration with *desired*."""
        body = codec.serialize(desired).encode("utf-8")
        logger.info(
            "Publishing %d bytes to %s", len(body), self.destination_uri
        )
        await self.store.write_object(
            self.inputs.bucket,
            self.inputs.destination,
            body,
            content_type=codec.content_type,
        )
