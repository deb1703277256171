from .transfer import IDENTITY_FRAME_PLACEHOLDER_URL, MotionTransfer, TransferResult

__all__ = ["IDENTITY_FRAME_PLACEHOLDER_URL", "MotionTransfer", "TransferResult"]
