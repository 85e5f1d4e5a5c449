# -*- coding: utf-8 -*-

from odoo import models


class ProductProduct(models.Model):
    _inherit = 'product.product'

    def write(self, vals):
        """Keep the template commercial cost in sync with the variant cost"""
        res = super().write(vals)
        if 'standard_price' in vals and not self.env.context.get('skip_commercial_cost_recompute'):
            self.product_tmpl_id._recompute_commercial_cost()
        return res
