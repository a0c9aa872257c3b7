"""
Models page flow: dataset check, questionnaire, recommended models.
"""
import enum
import threading
from typing import List, Optional, Union

import httpx

from mlworkflow.client.upload_widget import UploadWidget
from mlworkflow.core.config import settings
from mlworkflow.core.exceptions import CatalogError
from mlworkflow.core.logging_utils import get_logger
from mlworkflow.schemas.catalog import ModelDescriptor
from mlworkflow.services.catalog import CatalogKind, Heading, TargetType, heading_for, models_for, parse_target_type, resolve_kind

logger = get_logger(__name__)


class PageStep(str, enum.Enum):
    loading = "loading"
    empty = "empty"
    questionnaire = "questionnaire"
    models = "models"


class ModelsPage:
    """
    Controller for the models page.

    ``mount()`` asks the API once whether any dataset exists. Without one
    the page stays in the ``empty`` step and exposes an embedded
    ``UploadWidget``; a finished upload moves it to the questionnaire.
    """

    def __init__(
        self,
        client: httpx.Client,
        check_url: str = "/api/datasets/check",
        upload_url: str = "/api/upload",
        handoff_delay: float = settings.HANDOFF_DELAY_SECONDS,
    ):
        self.client = client
        self.check_url = check_url
        self.upload_url = upload_url
        self.handoff_delay = handoff_delay

        self.step = PageStep.loading
        self.has_datasets = False
        self.uploader: Optional[UploadWidget] = None
        self.is_labeled: Optional[bool] = None
        self.target_type: Optional[TargetType] = None
        # step/uploader are also written from the upload hand-off thread
        self._lock = threading.Lock()

    def mount(self) -> PageStep:
        try:
            resp = self.client.get(self.check_url)
            resp.raise_for_status()
            self.has_datasets = bool(resp.json().get("hasDatasets"))
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error("Error checking datasets: %s", e)
            self.has_datasets = False

        if self.has_datasets:
            self.step = PageStep.questionnaire
        else:
            self.step = PageStep.empty
            self.uploader = UploadWidget(
                self.client,
                upload_url=self.upload_url,
                on_complete=self._dataset_uploaded,
                handoff_delay=self.handoff_delay,
            )
        return self.step

    def _dataset_uploaded(self) -> None:
        with self._lock:
            if self.step is not PageStep.empty:
                return
            self.has_datasets = True
            self.uploader = None
            self.step = PageStep.questionnaire

    # -------- questionnaire --------
    def answer_labeled(self, value: bool) -> None:
        self.is_labeled = bool(value)

    def answer_target_type(self, value: Union[TargetType, str]) -> None:
        self.target_type = parse_target_type(value)

    @property
    def asks_target_type(self) -> bool:
        return self.is_labeled is True

    @property
    def can_continue(self) -> bool:
        if self.is_labeled is None:
            return False
        return not self.is_labeled or self.target_type is not None

    def show_models(self) -> List[ModelDescriptor]:
        with self._lock:
            if self.step is not PageStep.questionnaire:
                raise CatalogError(f"cannot show models from step {self.step.value}")
            if not self.can_continue:
                raise CatalogError("questionnaire is incomplete")
            self.step = PageStep.models
        return self.models

    def change_dataset_type(self) -> None:
        """Back to the questionnaire, keeping the current answers."""
        with self._lock:
            if self.step is PageStep.models:
                self.step = PageStep.questionnaire

    def reset(self) -> None:
        with self._lock:
            self.is_labeled = None
            self.target_type = None
            if self.step is PageStep.models:
                self.step = PageStep.questionnaire

    # -------- models --------
    @property
    def kind(self) -> CatalogKind:
        return resolve_kind(self.is_labeled, self.target_type)

    @property
    def models(self) -> List[ModelDescriptor]:
        return models_for(self.is_labeled, self.target_type)

    @property
    def heading(self) -> Heading:
        return heading_for(self.kind)
