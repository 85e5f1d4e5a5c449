# -*- coding: utf-8 -*-

from odoo import api, fields, models, _
from odoo.exceptions import UserError, ValidationError
from odoo.tools import float_compare, float_is_zero
import logging

from .commercial_cost_engine import (
    CALCULATION_METHODS,
    DISCOUNT_DIGITS,
    DISCOUNT_MAX,
    DISCOUNT_MIN,
    METHOD_DISCOUNT_LIST_PRICE,
    METHOD_MAXIMUM_COST,
    CommercialCostEngine,
    CostSnapshot,
    InvalidStateError,
    RangeError,
)

_logger = logging.getLogger(__name__)

BATCH_SIZE = 500

# Valor del asistente para los productos sin método de cálculo
BLANK_METHOD_FILTER = 'blank'

# Campos que disparan el recálculo del costo comercial
COMMERCIAL_COST_TRIGGER_FIELDS = {
    'commercial_cost_method',
    'commercial_discount_pct',
    'commercial_cost',
    'list_price',
    'standard_price',
    'last_direct_cost',
}


class ProductTemplate(models.Model):
    _inherit = 'product.template'

    @api.model
    def _get_default_commercial_cost_method(self):
        """Get the default calculation method from settings"""
        param = self.env['ir.config_parameter'].sudo().get_param(
            'almus_product_commercial_cost.default_method'
        )
        if not param:
            return False
        if param not in dict(self._fields['commercial_cost_method'].selection):
            _logger.warning("Invalid default commercial cost method parameter: %s", param)
            return False
        return param

    last_direct_cost = fields.Float(
        string='Last Direct Cost',
        digits='Product Price',
        help='Most recent direct unit cost paid for this product'
    )

    commercial_cost_method = fields.Selection(
        CALCULATION_METHODS,
        string='Calculation Method',
        default=_get_default_commercial_cost_method,
        help='Rule used to derive the commercial cost. When empty, the highest '
             'of cost and last direct cost is used.'
    )

    commercial_discount_pct = fields.Float(
        string='Discount Percentage',
        digits='Discount',
        default=0.0,
        help='Discount applied to the sales price when the calculation method '
             'is Discount from List Price'
    )

    commercial_cost = fields.Float(
        string='Commercial Cost',
        digits='Product Price',
        company_dependent=True,
        help='Cost basis used for pricing decisions, per company like the cost'
    )

    # Technical fields driving the form
    commercial_cost_editable = fields.Boolean(
        compute='_compute_commercial_cost_editability',
    )
    commercial_discount_editable = fields.Boolean(
        compute='_compute_commercial_cost_editability',
    )
    show_commercial_cost = fields.Boolean(
        compute='_compute_show_commercial_cost',
        help='Technical field to know if commercial cost should be displayed'
    )

    @api.model
    def _get_commercial_cost_engine(self):
        return CommercialCostEngine(
            precision_digits=self.env['decimal.precision'].precision_get('Product Price')
        )

    def _get_commercial_cost_snapshot(self, vals=None):
        """Build the engine input from the record, overridden by ``vals``"""
        self.ensure_one()
        vals = vals or {}

        def value(name):
            return vals[name] if name in vals else self[name]

        return CostSnapshot(
            calc_method=value('commercial_cost_method') or False,
            unit_cost=value('standard_price') or 0.0,
            last_direct_cost=value('last_direct_cost') or 0.0,
            unit_price=value('list_price') or 0.0,
            discount_pct=value('commercial_discount_pct') or 0.0,
            commercial_cost=value('commercial_cost') or 0.0,
        )

    def _get_commercial_cost_purchase_prices(self):
        """Vendor prices of the product in the company currency"""
        self.ensure_one()
        company = self.env.company
        date = fields.Date.context_today(self)
        prices = []
        for seller in self.seller_ids:
            price = seller.price
            if seller.currency_id and seller.currency_id != company.currency_id:
                price = seller.currency_id._convert(
                    price, company.currency_id, company, date, round=False
                )
            prices.append(price)
        return prices

    @api.depends('commercial_cost_method', 'list_price')
    def _compute_commercial_cost_editability(self):
        engine = self._get_commercial_cost_engine()
        for template in self:
            editability = engine.compute_editability(template._get_commercial_cost_snapshot())
            template.commercial_cost_editable = editability.commercial_cost_editable
            template.commercial_discount_editable = editability.discount_editable

    @api.depends('type')
    def _compute_show_commercial_cost(self):
        """Commercial cost only makes sense for storable products"""
        for template in self:
            template.show_commercial_cost = template.type == 'product'

    @api.constrains('commercial_discount_pct', 'commercial_cost_method')
    def _check_commercial_discount_pct(self):
        for template in self:
            discount = template.commercial_discount_pct
            if (float_compare(discount, DISCOUNT_MIN, precision_digits=DISCOUNT_DIGITS) < 0
                    or float_compare(discount, DISCOUNT_MAX, precision_digits=DISCOUNT_DIGITS) > 0):
                raise RangeError(_(
                    'Discount Percentage must be between %(min)s and %(max)s.',
                    min=int(DISCOUNT_MIN),
                    max=int(DISCOUNT_MAX),
                ))
            if (template.commercial_cost_method != METHOD_DISCOUNT_LIST_PRICE
                    and not float_is_zero(discount, precision_digits=DISCOUNT_DIGITS)):
                raise InvalidStateError(_(
                    'Discount Percentage can only be edited when Calculation Method '
                    'is set to Discount from List Price.'
                ))

    # ------------------------------------------------------------
    # Onchange: mismo motor, sin bloquear la edición del formulario
    # ------------------------------------------------------------

    @api.onchange('commercial_cost_method')
    def _onchange_commercial_cost_method(self):
        engine = self._get_commercial_cost_engine()
        snapshot = self._get_commercial_cost_snapshot()
        if engine.compute_editability(snapshot).reset_discount:
            self.commercial_discount_pct = 0.0
        if engine.validate_method_change(
                self._origin.commercial_cost_method, self.commercial_cost_method, snapshot):
            return self._onchange_recalculate_commercial_cost()

    @api.onchange('list_price')
    def _onchange_list_price_commercial_cost(self):
        engine = self._get_commercial_cost_engine()
        if engine.validate_unit_price_change(self._get_commercial_cost_snapshot(), self.list_price):
            self.commercial_discount_pct = 0.0
            return
        return self._onchange_recalculate_commercial_cost()

    @api.onchange('standard_price', 'last_direct_cost', 'commercial_discount_pct', 'seller_ids')
    def _onchange_commercial_cost_inputs(self):
        return self._onchange_recalculate_commercial_cost()

    def _onchange_recalculate_commercial_cost(self):
        engine = self._get_commercial_cost_engine()
        try:
            self.commercial_cost = engine.recalculate(
                self._get_commercial_cost_snapshot(),
                self._get_commercial_cost_purchase_prices(),
            )
        except ValidationError as e:
            return {
                'warning': {
                    'title': _('Commercial Cost'),
                    'message': e.args[0],
                }
            }

    # ------------------------------------------------------------
    # ORM
    # ------------------------------------------------------------

    @api.model_create_multi
    def create(self, vals_list):
        templates = super().create(vals_list)
        if self.env.context.get('skip_commercial_cost_recompute'):
            return templates
        for template, vals in zip(templates, vals_list):
            template._check_commercial_cost_write(vals, creating=True)
        templates._recompute_commercial_cost()
        return templates

    def write(self, vals):
        if (self.env.context.get('skip_commercial_cost_recompute')
                or not COMMERCIAL_COST_TRIGGER_FIELDS.intersection(vals)):
            return super().write(vals)

        self._check_commercial_cost_write(vals)

        if ('commercial_cost_method' in vals
                and vals['commercial_cost_method'] != METHOD_DISCOUNT_LIST_PRICE
                and 'commercial_discount_pct' not in vals):
            vals = dict(vals, commercial_discount_pct=0.0)

        res = super().write(vals)
        self._recompute_commercial_cost()
        return res

    def _check_commercial_cost_write(self, vals, creating=False):
        """Validate ``vals`` before they reach the database

        A sales price set to zero on a product already under discount from list
        price is accepted on write: the discount is reset and the cost waits
        for a new price. The same write may only clear the discount.
        """
        engine = self._get_commercial_cost_engine()
        for template in self:
            snapshot = template._get_commercial_cost_snapshot(vals)
            clears_discount = float_is_zero(
                vals.get('commercial_discount_pct') or 0.0, precision_digits=DISCOUNT_DIGITS
            )
            if (not creating and 'list_price' in vals and clears_discount
                    and 'commercial_cost_method' not in vals
                    and template.commercial_cost_method == METHOD_DISCOUNT_LIST_PRICE
                    and engine.validate_unit_price_change(snapshot, snapshot.unit_price)):
                continue
            if 'commercial_discount_pct' in vals:
                discount = vals['commercial_discount_pct'] or 0.0
                # Poner el descuento en cero fuera del método de descuento es válido
                if (snapshot.calc_method == METHOD_DISCOUNT_LIST_PRICE
                        or not float_is_zero(discount, precision_digits=DISCOUNT_DIGITS)):
                    engine.validate_discount_edit(snapshot, discount)
            elif ('commercial_cost_method' in vals
                    and snapshot.calc_method == METHOD_DISCOUNT_LIST_PRICE):
                engine.recalculate(snapshot)

    def _recompute_commercial_cost(self):
        """Recalculate and store the commercial cost of the templates"""
        engine = self._get_commercial_cost_engine()
        for template in self:
            snapshot = template._get_commercial_cost_snapshot()
            values = {}
            if engine.compute_editability(snapshot).reset_discount and snapshot.discount_pct:
                values['commercial_discount_pct'] = 0.0

            if engine.validate_unit_price_change(snapshot, snapshot.unit_price):
                if snapshot.discount_pct:
                    values['commercial_discount_pct'] = 0.0
                _logger.debug(
                    "Product %s (ID: %s) has no sales price, commercial cost pending",
                    template.display_name, template.id
                )
            else:
                cost = engine.recalculate(
                    snapshot, template._get_commercial_cost_purchase_prices()
                )
                if float_compare(cost, snapshot.commercial_cost,
                                 precision_digits=engine.precision_digits):
                    values['commercial_cost'] = cost

            if values:
                template.with_context(skip_commercial_cost_recompute=True).write(values)

    def _recompute_maximum_commercial_cost(self):
        """Vendor prices changed: only the maximum cost method depends on them"""
        if self.env.context.get('skip_commercial_cost_recompute'):
            return
        self.filtered(
            lambda t: t.commercial_cost_method == METHOD_MAXIMUM_COST
        )._recompute_commercial_cost()

    @api.model
    def action_recalculate_commercial_costs(self, method=None):
        """Force recalculation of commercial costs in the current company

        :param method: only recalculate products using this calculation method,
            ``BLANK_METHOD_FILTER`` for the products without one
        """
        if method == BLANK_METHOD_FILTER:
            domain = [('commercial_cost_method', '=', False)]
        elif method:
            domain = [('commercial_cost_method', '=', method)]
        else:
            domain = []
        templates = self.search(domain)
        total = len(templates)
        result = {'updated': 0, 'failed': 0}

        if total == 0:
            _logger.info("No products to recalculate commercial cost for")
            return result

        _logger.info("Recalculating commercial costs for %s products", total)

        for offset in range(0, total, BATCH_SIZE):
            batch = templates[offset:offset + BATCH_SIZE]
            for template in batch:
                try:
                    with self.env.cr.savepoint():
                        template._recompute_commercial_cost()
                    result['updated'] += 1
                except UserError as e:
                    _logger.warning(
                        "Could not recalculate commercial cost for product %s (ID: %s): %s",
                        template.display_name, template.id, e.args[0]
                    )
                    result['failed'] += 1
            _logger.info("Processed batch %s-%s of %s products",
                         offset + 1, min(offset + BATCH_SIZE, total), total)

        _logger.info(
            "Finished recalculating commercial costs. Updated: %s, failed: %s",
            result['updated'], result['failed']
        )
        return result
