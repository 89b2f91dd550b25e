"""lingmedia - media resolution for interlinear-text document metadata."""

__version__ = "0.4.0"
