"""
LLM Extraction Utilities
Inference client and response parsing helpers.
"""

from .api_utils import InferenceClient, RetryingInferenceClient
from .result_parser import ResultParser

__all__ = ['InferenceClient', 'RetryingInferenceClient', 'ResultParser']
