# -*- coding: utf-8 -*-

from . import models
from . import wizard


def post_init_hook(env):
    """
    Compute the commercial cost of the products existing before installation
    """
    env['product.template'].with_context(active_test=False).action_recalculate_commercial_costs()
