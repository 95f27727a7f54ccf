from abc import ABC, abstractmethod
from dataclasses import dataclass

from mclogs_uploader.pipeline.models import PipelineState, UploadSuccess
from mclogs_uploader.source.models import UploadSource


@dataclass(slots=True)
class PipelineContext:
    source: UploadSource
    state: PipelineState = PipelineState.IDLE
    content: str = ""
    upload_result: UploadSuccess | None = None
    copied: bool = False


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
