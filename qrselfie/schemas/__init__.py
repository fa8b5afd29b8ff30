from .photo import ErrorOut, MetaOut, PhotoRecord, UploadOut

__all__ = ["ErrorOut", "MetaOut", "PhotoRecord", "UploadOut"]
