# -*- coding: utf-8 -*-
"""
contracts.stdlib.control
========================

Storage-backed control primitives. Currently one: the one-way latch
(:mod:`.latch`), used to permanently switch off privileged token operations.
"""
