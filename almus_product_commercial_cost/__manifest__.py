# -*- coding: utf-8 -*-
{
    'name': 'Product Commercial Cost',
    'version': '17.0.1.0.0',
    'category': 'Inventory/Inventory',
    'summary': 'Commercial cost on products computed by a selectable calculation method',
    'description': """
        This module adds a Commercial Cost to products, used as cost basis for
        pricing decisions.

        Features:
        - Calculation methods: highest of cost and last direct cost (default),
          maximum cost including vendor prices, last direct cost, average cost,
          discount from list price and manually specified
        - Automatic recalculation when costs, sales price or vendor prices change
        - Discount percentage editable only under Discount from List Price
        - Fields hidden for non-storable products
        - New pricelist rule option: "Commercial Cost"
        - Default calculation method in settings
        - Recalculation wizard for all products
        - Extensible: other modules can add calculation methods

        Extending:
        - Add the value with selection_add on product.template.commercial_cost_method
        - Register a rule with CommercialCostEngine.register('<value>')
    """,
    'author': 'Almus Dev (JDV-ALM)',
    'website': 'https://www.almus.dev',
    'license': 'LGPL-3',
    'depends': [
        'product',
        'base_setup',
        'stock',
    ],
    'data': [
        'security/ir.model.access.csv',
        'wizard/commercial_cost_recalculation_wizard_views.xml',
        'views/res_config_settings_views.xml',
        'views/product_views.xml',
    ],
    'post_init_hook': 'post_init_hook',
    'installable': True,
    'application': False,
    'auto_install': False,
}
