#!/usr/bin/env python3

#
# Copyright (C) 2024-2025 biomodal. All rights reserved.
#

# Import the Cloud Function handlers
from blob_copy import blob_copy_function
from function_introduction import function_introduction

# This is the main entry point that Cloud Functions will use
# Deploy with --entry-point=blob_copy_function or --entry-point=function_introduction
__all__ = ["blob_copy_function", "function_introduction"]
