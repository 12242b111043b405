#!/usr/bin/env python3

#
# Copyright (C) 2024-2025 biomodal. All rights reserved.
#

import logging

import functions_framework

from function_settings import FUNCTION_INTRODUCTION

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Azure Functions!"
CONTENT_TYPE = "text/plain; charset=utf-8"


@functions_framework.http
def function_introduction(request):
    """
    Cloud Function entry point for the greeting.

    The request body, query and headers are never read.

    Args:
        request: HTTP request object

    Returns:
        tuple: Body, status code and headers
    """
    if request.method not in FUNCTION_INTRODUCTION.methods:
        logger.warning(f"Rejected {request.method} request")
        return (
            "Method Not Allowed",
            405,
            {"Content-Type": CONTENT_TYPE, "Allow": ", ".join(FUNCTION_INTRODUCTION.methods)},
        )

    logger.info("Python HTTP trigger function processed a request.")
    return WELCOME_MESSAGE, 200, {"Content-Type": CONTENT_TYPE}
