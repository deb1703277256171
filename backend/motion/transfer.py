import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

IDENTITY_FRAME_PLACEHOLDER_URL = "https://placehold.co/600x400/1a1a1a/FFF?text=Identity+Frame"


@dataclass(frozen=True)
class TransferResult:
    identity_frame_url: str
    generated_video_url: str


class MotionTransfer:
    """Stand-in for the motion extraction / transfer model.

    No frames are read: the identity frame is a fixed placeholder image and
    the generated video loops back the source video.
    """

    def __init__(self, identity_frame_url: str = IDENTITY_FRAME_PLACEHOLDER_URL):
        self.identity_frame_url = identity_frame_url

    def run(self, original_video_url: str) -> TransferResult:
        if not original_video_url:
            raise ValueError("original_video_url is required")
        logger.debug("Mock transfer for %s", original_video_url)
        return TransferResult(
            identity_frame_url=self.identity_frame_url,
            generated_video_url=original_video_url,
        )
