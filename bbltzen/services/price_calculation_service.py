"""
Price Calculation Service
Core business logic for product prices and taxes

Handles:
- Base price per product variant (standard drink, custom drink, dessert)
- Taxable amount of an order line (quantity and discount)
- Tax amount and gross-to-net back-calculation
- Memoization of base prices (PriceCache) and tax rates

Author: BBltZen
Date: 2026-10-19
"""
import logging
import threading
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError

from bbltzen.core.config import settings
from bbltzen.core.exceptions import BubbleTeaError, NotFoundError, ValidationError
from bbltzen.core.money import HUNDRED, ZERO, round_money, to_decimal
from bbltzen.domain.pricing import BatchPriceRequest, BatchPriceResult, CacheStats, OrderItemPrice
from bbltzen.domain.product import ProductType
from bbltzen.repositories.catalog_repository import CatalogRepository
from bbltzen.repositories.tax_rate_repository import TaxRateRepository
from bbltzen.services.price_cache import PriceCache

logger = logging.getLogger(__name__)


class PricedLine(Protocol):
    """Anything shaped like an order line (ORM OrderItem or a plain object)"""

    product_type: str
    article_id: int
    quantity: int
    tax_rate_id: int
    discount: Optional[Decimal]


def _require_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer: {value!r}")


class PriceCalculationService:
    """
    Service for computing product prices and taxes

    Prices of products are memoized per (ProductType, article_id) and tax
    rates per id for the lifetime of the instance; call clear_cache() after
    catalog or tax rate changes.

    Example (custom drink, size M: base 4.50, multiplier 1.20):
    tapioca 0.50 + lychee 0.80 -> 4.50 + (0.50 + 0.80) * 1.20 = 6.06
    """

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        tax_rate_repository: TaxRateRepository,
        cache: Optional[PriceCache] = None
    ):
        self.catalog = catalog_repository
        self.tax_rates = tax_rate_repository
        self.cache = cache if cache is not None else PriceCache(settings.PRICE_CACHE_TTL_SECONDS)
        self._tax_rate_memo: Dict[int, Decimal] = {}
        self._tax_rate_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Base prices
    # ------------------------------------------------------------------

    def calculate_price(self, product_type: Union[ProductType, str], article_id: int) -> Decimal:
        """
        Current base price of a product, dispatched on its variant tag

        Raises:
            ValidationError: unknown product type
            NotFoundError: product (or a record it depends on) not found
        """
        product_type = ProductType.parse(product_type)

        if product_type is ProductType.STANDARD_DRINK:
            return self.calculate_standard_drink_price(article_id)
        elif product_type is ProductType.CUSTOM_DRINK:
            return self.calculate_custom_drink_price(article_id)
        elif product_type is ProductType.DESSERT:
            return self.calculate_dessert_price(article_id)

        raise ValidationError(f"Unsupported product type: {product_type}")

    def calculate_standard_drink_price(self, article_id: int) -> Decimal:
        """
        Price of a standard drink

        Raises:
            ValidationError: article_id is not an integer
            NotFoundError: drink or its backing article not found
        """
        _require_int(article_id, "Article id")
        cached = self.cache.get(ProductType.STANDARD_DRINK, article_id)
        if cached is not None:
            return cached

        try:
            drink = self.catalog.get_standard_drink(article_id) if article_id > 0 else None
            if drink is None:
                raise NotFoundError(f"Standard drink not found for article: {article_id}")
            if drink.article is None:
                raise NotFoundError(f"Article record missing for standard drink: {article_id}")

            price = round_money(drink.price)
            self.cache.put(ProductType.STANDARD_DRINK, article_id, price)
            logger.info(f"Calculated standard drink price {article_id}: {price}")
            return price

        except BubbleTeaError:
            logger.error(f"Error calculating standard drink price {article_id}")
            raise

    def calculate_custom_drink_price(self, article_id: int) -> Decimal:
        """
        Price of a custom drink

        price = cup size base price + sum(ingredient extra price * size multiplier)
        over the available ingredients of the drink's custom personalization.

        Raises:
            ValidationError: article_id is not an integer
            NotFoundError: drink, personalization or cup size not found
        """
        _require_int(article_id, "Article id")
        cached = self.cache.get(ProductType.CUSTOM_DRINK, article_id)
        if cached is not None:
            return cached

        try:
            drink = self.catalog.get_custom_drink(article_id) if article_id > 0 else None
            if drink is None:
                raise NotFoundError(f"Custom drink not found for article: {article_id}")

            personalization = self.catalog.get_custom_personalization(drink.custom_personalization_id)
            if personalization is None:
                raise NotFoundError(
                    f"Custom personalization not found: {drink.custom_personalization_id}"
                )

            cup_size = self.catalog.get_cup_size(personalization.cup_size_id)
            if cup_size is None:
                raise NotFoundError(f"Cup size not found: {personalization.cup_size_id}")

            base_price = to_decimal(cup_size.base_price)
            multiplier = to_decimal(cup_size.multiplier)

            ingredients_price = ZERO
            for ingredient in self.catalog.get_ingredients_for_personalization(personalization.id):
                if not ingredient.is_available:
                    logger.debug(f"Skipping unavailable ingredient {ingredient.id} for custom drink {article_id}")
                    continue
                ingredients_price += to_decimal(ingredient.extra_price) * multiplier

            price = round_money(base_price + ingredients_price)
            self.cache.put(ProductType.CUSTOM_DRINK, article_id, price)

            logger.info(
                f"Calculated custom drink price {article_id}: base={base_price}, "
                f"ingredients={ingredients_price}, final={price}, size={cup_size.description}"
            )
            return price

        except BubbleTeaError:
            logger.error(f"Error calculating custom drink price {article_id}")
            raise

    def calculate_dessert_price(self, article_id: int) -> Decimal:
        """
        Price of a dessert

        Raises:
            ValidationError: article_id is not an integer
            NotFoundError: dessert not found
        """
        _require_int(article_id, "Article id")
        cached = self.cache.get(ProductType.DESSERT, article_id)
        if cached is not None:
            return cached

        dessert = self.catalog.get_dessert(article_id) if article_id > 0 else None
        if dessert is None:
            logger.error(f"Dessert not found for article: {article_id}")
            raise NotFoundError(f"Dessert not found for article: {article_id}")

        price = round_money(dessert.price)
        self.cache.put(ProductType.DESSERT, article_id, price)
        return price

    # ------------------------------------------------------------------
    # Taxes
    # ------------------------------------------------------------------

    def get_tax_rate(self, tax_rate_id: int) -> Decimal:
        """
        Stored percentage of a tax rate (22.00 = 22%)

        Memoized per id until clear_cache().

        Raises:
            ValidationError: tax_rate_id is not an integer
            NotFoundError: tax rate not found
        """
        if tax_rate_id is not None:
            _require_int(tax_rate_id, "Tax rate id")

        with self._tax_rate_lock:
            cached = self._tax_rate_memo.get(tax_rate_id)
        if cached is not None:
            return cached

        rate = self.tax_rates.get_rate(tax_rate_id) if tax_rate_id and tax_rate_id > 0 else None
        if rate is None:
            logger.error(f"Tax rate not found: {tax_rate_id}")
            raise NotFoundError(f"Tax rate not found: {tax_rate_id}")

        with self._tax_rate_lock:
            self._tax_rate_memo[tax_rate_id] = rate
        return rate

    def validate_tax_rate(self, tax_rate_id: int) -> bool:
        """True when the tax rate exists and 0 < rate <= 100"""
        try:
            rate = self.get_tax_rate(tax_rate_id)
        except (NotFoundError, ValidationError):
            return False
        return ZERO < rate <= HUNDRED

    def calculate_taxable_amount(
        self,
        unit_price: Decimal,
        quantity: int,
        discount: Optional[Decimal] = None
    ) -> Decimal:
        """
        Taxable base of an order line: unit_price * quantity - discount

        Raises:
            ValidationError: non-integer or non-positive quantity, non-numeric
                or negative price or discount, or a discount larger than the
                line amount
        """
        _require_int(quantity, "Quantity")
        if quantity <= 0:
            raise ValidationError(f"Quantity must be greater than zero: {quantity}")

        unit_price = to_decimal(unit_price)
        discount = to_decimal(discount) if discount is not None else ZERO

        if unit_price < 0:
            raise ValidationError(f"Unit price cannot be negative: {unit_price}")
        if discount < 0:
            raise ValidationError(f"Discount cannot be negative: {discount}")

        taxable = round_money(unit_price * quantity - discount)
        if taxable < 0:
            raise ValidationError(
                f"Discount {discount} exceeds line amount {unit_price} x {quantity}"
            )
        return taxable

    def calculate_tax_amount(self, taxable_amount: Decimal, tax_rate_id: int) -> Decimal:
        """
        Tax on a taxable amount: round(taxable_amount * rate / 100, 2)

        Raises:
            NotFoundError: tax rate not found
        """
        rate = self.get_tax_rate(tax_rate_id)
        return round_money(to_decimal(taxable_amount) * rate / HUNDRED)

    def calculate_imponibile(self, gross_amount: Decimal, quantity: int, tax_rate_id: int) -> Decimal:
        """
        Net taxable amount contained in a tax-inclusive figure

        net = gross / (1 + rate / 100). quantity is accepted for call-site
        symmetry with calculate_taxable_amount and does not enter the formula.
        A 0% rate returns the gross amount unchanged.

        Raises:
            NotFoundError: tax rate not found
        """
        rate = self.get_tax_rate(tax_rate_id)
        gross_amount = to_decimal(gross_amount)

        if rate == 0:
            return round_money(gross_amount)

        return round_money(gross_amount / (1 + rate / HUNDRED))

    # ------------------------------------------------------------------
    # Order lines and batches
    # ------------------------------------------------------------------

    def calculate_order_item_price(self, item: PricedLine) -> OrderItemPrice:
        """
        Full price breakdown of an order line at current catalog prices

        Raises:
            ValidationError: missing item, bad quantity, tax rate id or product type
            NotFoundError: product or tax rate not found
        """
        if item is None:
            raise ValidationError("Order item is required")
        _require_int(item.quantity, "Quantity")
        if item.quantity <= 0:
            raise ValidationError(f"Quantity must be greater than zero: {item.quantity}")
        if item.tax_rate_id is not None:
            _require_int(item.tax_rate_id, "Tax rate id")
        if not item.tax_rate_id or item.tax_rate_id <= 0:
            raise ValidationError(f"Invalid tax rate id: {item.tax_rate_id}")

        product_type = ProductType.parse(item.product_type)
        discount = to_decimal(item.discount) if item.discount is not None else ZERO

        try:
            base_price = self.calculate_price(product_type, item.article_id)
            rate = self.get_tax_rate(item.tax_rate_id)
            taxable = self.calculate_taxable_amount(base_price, item.quantity, discount)
            tax = self.calculate_tax_amount(taxable, item.tax_rate_id)
        except BubbleTeaError:
            logger.error(f"Error calculating order item price for {product_type.value} {item.article_id}")
            raise

        total = round_money(taxable + tax)

        result = OrderItemPrice(
            product_type=product_type,
            article_id=item.article_id,
            quantity=item.quantity,
            base_price=base_price,
            discount=round_money(discount),
            taxable_amount=taxable,
            tax_amount=tax,
            total_with_tax=total,
            tax_rate_id=item.tax_rate_id,
            tax_rate=rate,
            detail=f"Price: {base_price} x {item.quantity} - {round_money(discount)} = {taxable}, "
                   f"VAT {rate}% = {tax}, total {total}",
        )

        logger.info(
            f"Calculated order item: type={product_type.value}, base={base_price}, "
            f"quantity={item.quantity}, total={total}"
        )
        return result

    def calculate_batch_prices(self, request: BatchPriceRequest) -> BatchPriceResult:
        """
        Price several products in one call

        A failing id is reported in result.errors; the remaining ids are
        still priced.
        """
        result = BatchPriceResult()

        logger.info(
            f"Batch pricing {len(request.standard_drink_ids)} standard drinks, "
            f"{len(request.custom_drink_ids)} custom drinks, {len(request.dessert_ids)} desserts"
        )

        groups = [
            (ProductType.STANDARD_DRINK, "Standard drink", request.standard_drink_ids, result.standard_drink_prices),
            (ProductType.CUSTOM_DRINK, "Custom drink", request.custom_drink_ids, result.custom_drink_prices),
            (ProductType.DESSERT, "Dessert", request.dessert_ids, result.dessert_prices),
        ]

        for product_type, label, ids, prices in groups:
            for article_id in ids:
                try:
                    prices[article_id] = self.calculate_price(product_type, article_id)
                except BubbleTeaError as e:
                    result.errors.append(f"{label} {article_id}: {e.message}")
                    logger.warning(f"Batch pricing failed for {label.lower()} {article_id}: {e.message}")

        logger.info(f"Batch pricing completed: {result.success_count} ok, {len(result.errors)} errors")
        return result

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Evict every memoized price and tax rate"""
        removed = self.cache.clear()
        with self._tax_rate_lock:
            self._tax_rate_memo.clear()
        logger.info(f"Price cache cleared ({removed} entries)")

    def preload_cache(self) -> int:
        """
        Compute and memoize prices of every currently available product

        A product whose price cannot be computed is logged and skipped;
        the preload carries on with the rest.

        Returns:
            Number of prices cached by this call
        """
        loaded = 0
        failed = 0

        for product_type in ProductType:
            try:
                article_ids = self.catalog.list_available_ids(product_type)
            except SQLAlchemyError as e:
                logger.warning(f"Could not list available {product_type.name.lower()} products: {e}")
                continue

            for article_id in article_ids:
                if (product_type, article_id) in self.cache:
                    continue
                try:
                    self.calculate_price(product_type, article_id)
                    loaded += 1
                except (BubbleTeaError, SQLAlchemyError) as e:
                    failed += 1
                    logger.warning(f"Preload skipped {product_type.value} {article_id}: {e}")

        logger.info(f"Price cache preload completed: {loaded} loaded, {failed} skipped")
        return loaded

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()
