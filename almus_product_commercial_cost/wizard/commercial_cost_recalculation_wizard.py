# -*- coding: utf-8 -*-

from odoo import fields, models, _

from ..models.product_template import BLANK_METHOD_FILTER


class AlmusCommercialCostRecalculationWizard(models.TransientModel):
    _name = 'almus.commercial.cost.recalculation.wizard'
    _description = 'Commercial Cost Recalculation Wizard'

    products_count = fields.Integer(
        string='Products to Update',
        readonly=True,
        help='Number of products that will be updated'
    )

    calc_method = fields.Selection(
        selection=lambda self: [(BLANK_METHOD_FILTER, _('Not Set'))] + list(
            self.env['product.template']._fields['commercial_cost_method'].selection
        ),
        string='Only Calculation Method',
        help='Restrict the recalculation to products using this method, or to the '
             'products without one with Not Set. Leave empty to recalculate every product.'
    )

    def action_confirm_recalculation(self):
        """Confirm and execute the recalculation"""
        self.ensure_one()

        result = self.env['product.template'].sudo().action_recalculate_commercial_costs(
            method=self.calc_method
        )

        if result['failed']:
            message = _(
                'Commercial costs have been recalculated for %(updated)s products. '
                '%(failed)s products could not be recalculated, see the server log.',
                updated=result['updated'],
                failed=result['failed'],
            )
            notification_type = 'warning'
        else:
            message = _(
                'Commercial costs have been recalculated for %s products.',
                result['updated']
            )
            notification_type = 'success'

        return {
            'type': 'ir.actions.client',
            'tag': 'display_notification',
            'params': {
                'title': _('Commercial Cost'),
                'message': message,
                'type': notification_type,
                'sticky': False,
                'next': {
                    'type': 'ir.actions.act_window_close'
                }
            }
        }
