#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
公共模块：常量、异常、日志
"""
