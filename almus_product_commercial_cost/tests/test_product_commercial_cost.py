# -*- coding: utf-8 -*-

from odoo.exceptions import ValidationError
from odoo.tests import Form, TransactionCase, tagged

from ..models.commercial_cost_engine import InvalidStateError, RangeError


@tagged('post_install', '-at_install')
class TestProductCommercialCost(TransactionCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.vendor = cls.env['res.partner'].create({'name': 'Commercial Cost Vendor'})
        cls.product = cls.env['product.template'].create({
            'name': 'Commercial Widget',
            'detailed_type': 'product',
            'list_price': 100.0,
            'standard_price': 10.0,
            'last_direct_cost': 15.0,
        })

    def _add_seller(self, price, product=None):
        return self.env['product.supplierinfo'].create({
            'partner_id': self.vendor.id,
            'product_tmpl_id': (product or self.product).id,
            'price': price,
        })

    def test_blank_method_on_create(self):
        self.assertFalse(self.product.commercial_cost_method)
        self.assertEqual(self.product.commercial_cost, 15.0)

    def test_blank_method_follows_costs(self):
        self.product.last_direct_cost = 8.0
        self.assertEqual(self.product.commercial_cost, 10.0)
        self.product.standard_price = 20.0
        self.assertEqual(self.product.commercial_cost, 20.0)

    def test_variant_cost_change(self):
        self.product.product_variant_id.write({'standard_price': 30.0})
        self.assertEqual(self.product.commercial_cost, 30.0)

    def test_maximum_cost_with_vendor_prices(self):
        self.product.write({
            'commercial_cost_method': 'maximum_cost',
            'last_direct_cost': 8.0,
        })
        self.assertEqual(self.product.commercial_cost, 10.0)

        highest = self._add_seller(12.0)
        self._add_seller(9.0)
        self.assertEqual(self.product.commercial_cost, 12.0)

        highest.price = 11.0
        self.assertEqual(self.product.commercial_cost, 11.0)

        highest.unlink()
        self.assertEqual(self.product.commercial_cost, 10.0)

    def test_maximum_cost_converts_vendor_currency(self):
        currency = self.env['res.currency'].create({
            'name': 'CCX',
            'symbol': 'X',
            'rounding': 0.01,
        })
        self.env['res.currency.rate'].create({
            'name': '2020-01-01',
            'rate': 2.0,
            'currency_id': currency.id,
            'company_id': self.env.company.id,
        })
        self.product.write({
            'commercial_cost_method': 'maximum_cost',
            'last_direct_cost': 8.0,
        })
        seller = self._add_seller(24.0)
        seller.currency_id = currency
        self.assertEqual(self.product.commercial_cost, 12.0)

    def test_commercial_cost_per_company(self):
        company = self.env['res.company'].create({'name': 'Commercial Cost Branch'})
        self.product.with_company(company).write({'standard_price': 50.0})
        self.assertEqual(self.product.with_company(company).commercial_cost, 50.0)
        self.assertEqual(self.product.commercial_cost, 15.0)

    def test_vendor_prices_ignored_by_other_methods(self):
        self._add_seller(50.0)
        self.assertEqual(self.product.commercial_cost, 15.0)

    def test_last_direct_and_average_cost(self):
        self.product.commercial_cost_method = 'last_direct_cost'
        self.assertEqual(self.product.commercial_cost, 15.0)
        self.product.commercial_cost_method = 'average_cost'
        self.assertEqual(self.product.commercial_cost, 10.0)

    def test_discount_from_list_price(self):
        self.product.write({
            'commercial_cost_method': 'discount_list_price',
            'commercial_discount_pct': 20.0,
        })
        self.assertEqual(self.product.commercial_cost, 80.0)
        self.product.list_price = 50.0
        self.assertEqual(self.product.commercial_cost, 40.0)

    def test_discount_method_requires_unit_price(self):
        self.product.list_price = 0.0
        with self.assertRaises(ValidationError):
            self.product.commercial_cost_method = 'discount_list_price'

    def test_create_discount_method_requires_unit_price(self):
        with self.assertRaises(ValidationError):
            self.env['product.template'].create({
                'name': 'Free Widget',
                'list_price': 0.0,
                'commercial_cost_method': 'discount_list_price',
                'commercial_discount_pct': 10.0,
            })

    def test_manual_cost_is_kept(self):
        self.product.write({
            'commercial_cost_method': 'manual',
            'commercial_cost': 42.0,
        })
        self.assertEqual(self.product.commercial_cost, 42.0)
        self.product.write({'standard_price': 99.0, 'last_direct_cost': 120.0})
        self.assertEqual(self.product.commercial_cost, 42.0)

    def test_commercial_cost_recomputed_outside_manual(self):
        self.product.commercial_cost = 42.0
        self.assertEqual(self.product.commercial_cost, 15.0)

    def test_discount_edit_outside_discount_method(self):
        with self.assertRaises(InvalidStateError):
            self.product.commercial_discount_pct = 5.0
        self.assertEqual(self.product.commercial_discount_pct, 0.0)

        self.product.commercial_cost_method = 'manual'
        with self.assertRaises(InvalidStateError):
            self.product.commercial_discount_pct = 100.0

    def test_discount_reset_outside_discount_method(self):
        self.product.commercial_discount_pct = 0.0
        self.assertEqual(self.product.commercial_discount_pct, 0.0)

    def test_discount_out_of_range(self):
        self.product.commercial_cost_method = 'discount_list_price'
        with self.assertRaises(RangeError):
            self.product.commercial_discount_pct = 120.0
        with self.assertRaises(RangeError):
            self.product.commercial_discount_pct = -5.0

    def test_unit_price_zero_resets_discount(self):
        self.product.write({
            'commercial_cost_method': 'discount_list_price',
            'commercial_discount_pct': 20.0,
        })
        self.product.list_price = 0.0
        self.assertEqual(self.product.commercial_discount_pct, 0.0)
        self.assertEqual(self.product.commercial_cost, 80.0)
        self.assertFalse(self.product.commercial_discount_editable)

        with self.assertRaises(ValidationError):
            self.product.commercial_discount_pct = 10.0

        self.product.list_price = 60.0
        self.assertTrue(self.product.commercial_discount_editable)
        self.assertEqual(self.product.commercial_cost, 60.0)
        self.product.commercial_discount_pct = 50.0
        self.assertEqual(self.product.commercial_cost, 30.0)

    def test_price_reset_cannot_switch_to_discount_method(self):
        self.product.commercial_cost_method = 'average_cost'
        with self.assertRaises(ValidationError):
            self.product.write({
                'commercial_cost_method': 'discount_list_price',
                'list_price': 0.0,
            })
        self.assertEqual(self.product.commercial_cost_method, 'average_cost')
        self.assertEqual(self.product.list_price, 100.0)

    def test_price_reset_cannot_set_discount(self):
        self.product.write({
            'commercial_cost_method': 'discount_list_price',
            'commercial_discount_pct': 20.0,
        })
        with self.assertRaises(ValidationError):
            self.product.write({
                'list_price': 0.0,
                'commercial_discount_pct': 30.0,
            })
        self.assertEqual(self.product.commercial_discount_pct, 20.0)
        self.assertEqual(self.product.commercial_cost, 80.0)

    def test_price_reset_with_cleared_discount(self):
        self.product.write({
            'commercial_cost_method': 'discount_list_price',
            'commercial_discount_pct': 20.0,
        })
        self.product.write({
            'list_price': 0.0,
            'commercial_discount_pct': 0.0,
        })
        self.assertEqual(self.product.commercial_discount_pct, 0.0)
        self.assertEqual(self.product.commercial_cost, 80.0)

    def test_leaving_discount_method_resets_discount(self):
        self.product.write({
            'commercial_cost_method': 'discount_list_price',
            'commercial_discount_pct': 20.0,
        })
        self.product.commercial_cost_method = 'average_cost'
        self.assertEqual(self.product.commercial_discount_pct, 0.0)
        self.assertEqual(self.product.commercial_cost, 10.0)

    def test_create_discount_outside_discount_method(self):
        with self.assertRaises(InvalidStateError):
            self.env['product.template'].create({
                'name': 'Discounted Widget',
                'list_price': 10.0,
                'commercial_cost_method': 'average_cost',
                'commercial_discount_pct': 10.0,
            })

    def test_editability(self):
        self.assertFalse(self.product.commercial_cost_editable)
        self.assertFalse(self.product.commercial_discount_editable)

        self.product.commercial_cost_method = 'manual'
        self.assertTrue(self.product.commercial_cost_editable)
        self.assertFalse(self.product.commercial_discount_editable)

        self.product.commercial_cost_method = 'discount_list_price'
        self.assertFalse(self.product.commercial_cost_editable)
        self.assertTrue(self.product.commercial_discount_editable)

    def test_show_commercial_cost_for_storable_only(self):
        self.assertTrue(self.product.show_commercial_cost)
        service = self.env['product.template'].create({
            'name': 'Installation Service',
            'detailed_type': 'service',
        })
        self.assertFalse(service.show_commercial_cost)

    def test_skip_recompute_context(self):
        self.product.with_context(skip_commercial_cost_recompute=True).write({
            'last_direct_cost': 30.0,
        })
        self.assertEqual(self.product.commercial_cost, 15.0)

    def test_default_method_from_settings(self):
        self.env['ir.config_parameter'].sudo().set_param(
            'almus_product_commercial_cost.default_method', 'average_cost'
        )
        product = self.env['product.template'].create({
            'name': 'Average Widget',
            'standard_price': 7.0,
            'last_direct_cost': 9.0,
        })
        self.assertEqual(product.commercial_cost_method, 'average_cost')
        self.assertEqual(product.commercial_cost, 7.0)

    def test_invalid_default_method_is_ignored(self):
        self.env['ir.config_parameter'].sudo().set_param(
            'almus_product_commercial_cost.default_method', 'not_a_method'
        )
        product = self.env['product.template'].create({'name': 'Plain Widget'})
        self.assertFalse(product.commercial_cost_method)

    def test_form_method_change(self):
        with Form(self.product) as form:
            form.commercial_cost_method = 'average_cost'
            self.assertEqual(form.commercial_cost, 10.0)
        self.assertEqual(self.product.commercial_cost_method, 'average_cost')
        self.assertEqual(self.product.commercial_cost, 10.0)

    def test_form_discount_method_without_price_warns(self):
        self.product.list_price = 0.0
        form = Form(self.product)
        with self.assertLogs('odoo.tests.form', level='WARNING') as logs:
            form.commercial_cost_method = 'discount_list_price'
        self.assertIn('Unit Price must be specified', logs.output[0])
        self.assertEqual(form.commercial_cost, 15.0)
