# -*- coding: utf-8 -*-
"""
contracts.tests
===============

Fan Token test-suite package. Shared fixtures live in ``conftest.py``;
``fan_token_v2`` is the second implementation used by the upgrade tests.
"""
