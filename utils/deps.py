from fastapi import Request
from api.reports.reports_service import ReportStore
from api.detection.image_classifier import ImageClassifier


def get_report_store(request: Request) -> ReportStore:
    """The store built at startup and owned by the application."""
    return request.app.state.report_store


def get_classifier(request: Request) -> ImageClassifier:
    return request.app.state.classifier
