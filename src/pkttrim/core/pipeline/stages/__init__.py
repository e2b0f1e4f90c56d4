from .trim_payload import PayloadTrimStage

__all__ = ["PayloadTrimStage"]
