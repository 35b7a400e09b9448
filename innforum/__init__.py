# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

__version__ = "0.1.0"
