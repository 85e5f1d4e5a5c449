# -*- coding: utf-8 -*-
"""Commercial cost rules.

Pure decision logic: nothing in this module reads or writes records. The
product models build a ``CostSnapshot`` from their fields, ask the engine for
the resulting commercial cost and write it back themselves.
"""

from collections import namedtuple
import logging

from odoo import _
from odoo.exceptions import UserError, ValidationError
from odoo.tools import float_compare, float_is_zero, float_round

_logger = logging.getLogger(__name__)

METHOD_BLANK = False
METHOD_MAXIMUM_COST = 'maximum_cost'
METHOD_LAST_DIRECT_COST = 'last_direct_cost'
METHOD_AVERAGE_COST = 'average_cost'
METHOD_DISCOUNT_LIST_PRICE = 'discount_list_price'
METHOD_MANUAL = 'manual'

CALCULATION_METHODS = [
    (METHOD_MAXIMUM_COST, 'Maximum Cost'),
    (METHOD_LAST_DIRECT_COST, 'Last Direct Cost'),
    (METHOD_AVERAGE_COST, 'Average Cost'),
    (METHOD_DISCOUNT_LIST_PRICE, 'Discount from List Price'),
    (METHOD_MANUAL, 'Manually Specified'),
]

DISCOUNT_DIGITS = 2
DISCOUNT_MIN = 0.0
DISCOUNT_MAX = 100.0

CostSnapshot = namedtuple('CostSnapshot', [
    'calc_method',
    'unit_cost',
    'last_direct_cost',
    'unit_price',
    'discount_pct',
    'commercial_cost',
])

Editability = namedtuple('Editability', [
    'commercial_cost_editable',
    'discount_editable',
    'reset_discount',
])


class InvalidStateError(UserError):
    """A field was edited outside the calculation method that allows it."""


class RangeError(UserError):
    """A numeric value is outside its allowed domain."""


class CommercialCostEngine(object):
    """Compute and validate the commercial cost of a product.

    Rules are registered per calculation method. A rule receives the engine,
    the snapshot and the purchase prices and returns the new cost, or None to
    keep the current one. Methods without a rule leave the cost unchanged,
    so a new selection value added by another module is harmless until it
    registers its own rule::

        @CommercialCostEngine.register('landed_cost')
        def _rule_landed_cost(engine, snapshot, purchase_prices):
            return snapshot.unit_cost * 1.1
    """

    _rules = {}

    def __init__(self, precision_digits=2):
        self.precision_digits = precision_digits

    @classmethod
    def register(cls, method):
        def decorator(rule):
            cls._rules[method] = rule
            return rule
        return decorator

    @classmethod
    def unregister(cls, method):
        cls._rules.pop(method, None)

    @classmethod
    def get_rule(cls, method):
        return cls._rules.get(method or METHOD_BLANK)

    def is_zero(self, value):
        return float_is_zero(value or 0.0, precision_digits=self.precision_digits)

    def recalculate(self, snapshot, purchase_prices=()):
        """Return the commercial cost for ``snapshot``.

        :param snapshot: ``CostSnapshot`` of the product
        :param purchase_prices: vendor prices of the product, any order
        :raises ValidationError: discount from list price without unit price
        """
        rule = self.get_rule(snapshot.calc_method)
        if rule is None:
            _logger.debug(
                "No commercial cost rule for method %s, keeping current cost",
                snapshot.calc_method
            )
            return snapshot.commercial_cost
        cost = rule(self, snapshot, purchase_prices)
        if cost is None:
            return snapshot.commercial_cost
        return float_round(cost, precision_digits=self.precision_digits)

    def validate_method_change(self, old_method, new_method, snapshot):
        """Return True when the cost must be recalculated after the change."""
        if old_method != new_method:
            _logger.debug(
                "Commercial cost method changed from %s to %s",
                old_method, new_method
            )
        return new_method != METHOD_MANUAL

    def validate_discount_edit(self, snapshot, proposed_discount):
        """Check a direct edit of the discount and return the resulting cost."""
        if snapshot.calc_method != METHOD_DISCOUNT_LIST_PRICE:
            raise InvalidStateError(_(
                'Discount Percentage can only be edited when Calculation Method '
                'is set to Discount from List Price.'
            ))
        if self.is_zero(snapshot.unit_price):
            raise ValidationError(_(
                'Unit Price must be specified before setting a Discount Percentage.'
            ))
        proposed_discount = proposed_discount or 0.0
        if (float_compare(proposed_discount, DISCOUNT_MIN, precision_digits=DISCOUNT_DIGITS) < 0
                or float_compare(proposed_discount, DISCOUNT_MAX, precision_digits=DISCOUNT_DIGITS) > 0):
            raise RangeError(_(
                'Discount Percentage must be between %(min)s and %(max)s.',
                min=int(DISCOUNT_MIN),
                max=int(DISCOUNT_MAX),
            ))
        return self.recalculate(snapshot._replace(discount_pct=proposed_discount))

    def validate_unit_price_change(self, snapshot, new_unit_price):
        """Return True when the discount has to be reset to zero.

        Under discount from list price a zero unit price leaves nothing to
        discount from: the cost stays as it is until a price is set again.
        """
        return (
            snapshot.calc_method == METHOD_DISCOUNT_LIST_PRICE
            and self.is_zero(new_unit_price)
        )

    def compute_editability(self, snapshot):
        is_discount = snapshot.calc_method == METHOD_DISCOUNT_LIST_PRICE
        return Editability(
            commercial_cost_editable=snapshot.calc_method == METHOD_MANUAL,
            discount_editable=is_discount and not self.is_zero(snapshot.unit_price),
            reset_discount=not is_discount,
        )


@CommercialCostEngine.register(METHOD_BLANK)
def _rule_blank(engine, snapshot, purchase_prices):
    return max(snapshot.unit_cost, snapshot.last_direct_cost)


@CommercialCostEngine.register(METHOD_MAXIMUM_COST)
def _rule_maximum_cost(engine, snapshot, purchase_prices):
    # Sin precios de compra queda el máximo entre costo y último costo directo
    return max([snapshot.unit_cost, snapshot.last_direct_cost] + list(purchase_prices))


@CommercialCostEngine.register(METHOD_LAST_DIRECT_COST)
def _rule_last_direct_cost(engine, snapshot, purchase_prices):
    return snapshot.last_direct_cost


@CommercialCostEngine.register(METHOD_AVERAGE_COST)
def _rule_average_cost(engine, snapshot, purchase_prices):
    return snapshot.unit_cost


@CommercialCostEngine.register(METHOD_DISCOUNT_LIST_PRICE)
def _rule_discount_list_price(engine, snapshot, purchase_prices):
    if engine.is_zero(snapshot.unit_price):
        raise ValidationError(_(
            'Unit Price must be specified to calculate the Commercial Cost '
            'from a Discount Percentage.'
        ))
    return snapshot.unit_price * (1 - (snapshot.discount_pct or 0.0) / 100.0)


@CommercialCostEngine.register(METHOD_MANUAL)
def _rule_manual(engine, snapshot, purchase_prices):
    return None
