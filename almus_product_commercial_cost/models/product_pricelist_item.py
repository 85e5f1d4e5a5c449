# -*- coding: utf-8 -*-

from odoo import fields, models


class ProductPricelistItem(models.Model):
    _inherit = 'product.pricelist.item'

    # Extender el campo base para incluir el costo comercial
    base = fields.Selection(
        selection_add=[
            ('commercial_cost', 'Commercial Cost'),
        ],
        ondelete={'commercial_cost': 'set default'},
    )

    def _compute_base_price(self, product, quantity, uom, date, currency):
        """Override to use the commercial cost as base price"""
        if not self:
            return super()._compute_base_price(product, quantity, uom, date, currency)

        self.ensure_one()

        if self.base != 'commercial_cost':
            return super()._compute_base_price(product, quantity, uom, date, currency)

        currency.ensure_one()

        price = product.commercial_cost
        # El costo comercial está en la moneda de la compañía
        src_currency = product.cost_currency_id
        if src_currency and src_currency != currency:
            price = src_currency._convert(
                price,
                currency,
                self.env.company,
                date,
                round=False
            )

        if uom and product.uom_id != uom:
            price = product.uom_id._compute_price(price, uom)

        # Sin redondeo: la fórmula de la regla se aplica sobre el precio completo
        return price

