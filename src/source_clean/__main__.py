# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Main entry point for running source_clean as a module."""

from source_clean.cli import main

if __name__ == "__main__":
    main()
