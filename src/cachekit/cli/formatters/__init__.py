# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Output formatters for cache reports."""
