# -*- coding: utf-8 -*-

from odoo import api, fields, models, _
from odoo.exceptions import UserError
import logging

_logger = logging.getLogger(__name__)


def _commercial_cost_method_selection(self):
    return self.env['product.template']._fields['commercial_cost_method'].selection


class ResConfigSettings(models.TransientModel):
    _inherit = 'res.config.settings'

    commercial_cost_default_method = fields.Selection(
        selection=_commercial_cost_method_selection,
        string='Default Commercial Cost Method',
        help='Calculation method assigned to new products',
        config_parameter='almus_product_commercial_cost.default_method'
    )

    # Technical field to show how many products use the default method
    commercial_cost_products_info = fields.Char(
        string='Products with Default Method',
        compute='_compute_commercial_cost_products_info',
    )

    @api.depends('commercial_cost_default_method')
    def _compute_commercial_cost_products_info(self):
        method_labels = dict(_commercial_cost_method_selection(self))
        for record in self:
            method = record.commercial_cost_default_method or False
            count = self.env['product.template'].search_count([
                ('commercial_cost_method', '=', method)
            ])
            record.commercial_cost_products_info = _(
                '%(count)s products are using %(method)s',
                count=count,
                method=method_labels.get(method, _('the highest of cost and last direct cost')),
            )

    def set_values(self):
        old_method = self.env['ir.config_parameter'].sudo().get_param(
            'almus_product_commercial_cost.default_method'
        )
        super().set_values()
        new_method = self.commercial_cost_default_method
        if (old_method or False) != (new_method or False):
            _logger.info(
                "Default commercial cost method changed from %s to %s",
                old_method or 'blank', new_method or 'blank'
            )

    def action_recalculate_commercial_costs(self):
        """Open the confirmation wizard for a full recalculation"""
        self.ensure_one()

        if not self.env.user.has_group('stock.group_stock_manager'):
            raise UserError(_('You need Stock Manager rights to recalculate costs.'))

        self.set_values()

        products_count = self.env['product.template'].search_count([])
        if products_count == 0:
            raise UserError(_('No products found to recalculate.'))

        return {
            'type': 'ir.actions.act_window',
            'name': _('Recalculate Commercial Costs'),
            'res_model': 'almus.commercial.cost.recalculation.wizard',
            'view_mode': 'form',
            'target': 'new',
            'context': {
                'default_products_count': products_count,
            }
        }
