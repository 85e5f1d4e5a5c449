# -*- coding: utf-8 -*-

from . import commercial_cost_engine
from . import product_template
from . import product_product
from . import product_supplierinfo
from . import product_pricelist_item
from . import res_config_settings
