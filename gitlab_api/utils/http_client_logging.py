"""
HTTP client logging utilities.

This module provides the request logging used by HttpClient, kept apart so the
client class stays focused on dispatching. All credentials are masked with
DataMasker before anything is logged.
"""

import logging
import time
from typing import Any, Optional

import httpx

from .data_masker import DataMasker


def calculate_request_metrics(
    start_time: float,
    response: Optional[httpx.Response] = None,
    error: Optional[Exception] = None,
) -> tuple[int, Optional[int]]:
    """
    Calculate request duration and status code.

    Args:
        start_time: Request start time from time.perf_counter()
        response: Response (if successful)
        error: Exception (if request failed)

    Returns:
        Tuple of (duration_ms, status_code)
    """
    duration_ms = int((time.perf_counter() - start_time) * 1000)

    status_code: Optional[int] = None
    if response is not None:
        status_code = response.status_code
    elif error is not None:
        status_code = getattr(error, "status_code", None)

    return duration_ms, status_code


def mask_error_message(error: Optional[Exception]) -> Optional[str]:
    """
    Mask sensitive data in error message.

    Args:
        error: Exception object

    Returns:
        Masked error message string, or None if no error
    """
    if error is None:
        return None

    error_message = str(error)
    if any(keyword in error_message.lower() for keyword in ["password", "token", "secret"]):
        return DataMasker.MASKED_VALUE
    return error_message


def log_http_request_audit(
    logger: logging.Logger,
    method: str,
    url: str,
    duration_ms: int,
    status_code: Optional[int],
    error: Optional[Exception] = None,
) -> None:
    """
    Log one line per request: method, masked URL, status and duration.

    Args:
        logger: Logger to write to
        method: HTTP method
        url: Request URL
        duration_ms: Request duration in milliseconds
        status_code: HTTP status code, None for transport failures
        error: Exception if the request failed
    """
    masked_url = DataMasker.mask_url(url)
    status = status_code if status_code is not None else "-"
    if error is None:
        logger.info(f"{method} {masked_url} {status} ({duration_ms}ms)")
    else:
        logger.warning(
            f"{method} {masked_url} {status} ({duration_ms}ms) failed: "
            f"{mask_error_message(error)}"
        )


def log_http_request_debug(
    logger: logging.Logger,
    method: str,
    url: str,
    params: Any,
    headers: Optional[httpx.Headers],
    response: Optional[httpx.Response],
) -> None:
    """
    Log masked request parameters and headers plus response pagination headers.

    Args:
        logger: Logger to write to
        method: HTTP method
        url: Request URL
        params: Query parameters or form fields
        headers: Client default headers
        response: Response (if successful)
    """
    masked_params = DataMasker.mask_sensitive_data(params)
    masked_headers = DataMasker.mask_sensitive_data(dict(headers)) if headers else None
    message = (
        f"{method} {DataMasker.mask_url(url)} params={masked_params} headers={masked_headers}"
    )
    if response is not None:
        paging = {
            name: response.headers[name]
            for name in ("x-total", "x-total-pages", "x-page", "x-next-page")
            if name in response.headers
        }
        message = f"{message} content_length={len(response.content)} paging={paging}"
    logger.debug(message)
