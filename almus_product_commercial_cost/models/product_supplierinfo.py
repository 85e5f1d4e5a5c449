# -*- coding: utf-8 -*-

from odoo import api, models

# Campos del precio de proveedor que afectan el costo máximo
SUPPLIERINFO_COST_FIELDS = {'price', 'currency_id', 'product_tmpl_id', 'product_id'}


class ProductSupplierinfo(models.Model):
    _inherit = 'product.supplierinfo'

    @api.model_create_multi
    def create(self, vals_list):
        sellers = super().create(vals_list)
        sellers.product_tmpl_id._recompute_maximum_commercial_cost()
        return sellers

    def write(self, vals):
        templates = self.product_tmpl_id
        res = super().write(vals)
        if SUPPLIERINFO_COST_FIELDS.intersection(vals):
            (templates | self.product_tmpl_id)._recompute_maximum_commercial_cost()
        return res

    def unlink(self):
        templates = self.product_tmpl_id
        res = super().unlink()
        templates.exists()._recompute_maximum_commercial_cost()
        return res
