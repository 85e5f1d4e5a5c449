# -*- coding: utf-8 -*-

from . import test_commercial_cost_engine
from . import test_product_commercial_cost
from . import test_pricelist_commercial_cost
from . import test_commercial_cost_recalculation
