from .adapter import InternalsReportAdapter

__all__ = ["InternalsReportAdapter"]
