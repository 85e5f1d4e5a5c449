# -*- coding: utf-8 -*-

from . import commercial_cost_recalculation_wizard
