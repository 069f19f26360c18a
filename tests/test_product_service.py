"""Unit tests for catalog_api.services.products and pagination helpers."""

import unittest
from decimal import Decimal

from catalog_api.core.errors import AlreadyExistsError, NotFoundError, ValidationError
from catalog_api.schemas.product import ProductCreateRequest, ProductFilter
from catalog_api.services.pagination import normalize_page, total_pages
from catalog_api.services.products import ProductService
from tests.fakes import InMemoryProductRepository


def _create(name: str = "Widget", price: str = "9.99", **kwargs: object) -> ProductCreateRequest:
    return ProductCreateRequest(name=name, price=Decimal(price), **kwargs)


class TestPagination(unittest.TestCase):
    def test_normalize_page(self) -> None:
        self.assertEqual(normalize_page(1, 10), (1, 10))
        self.assertEqual(normalize_page(0, 10), (1, 10))
        self.assertEqual(normalize_page(-3, 0), (1, 10))
        self.assertEqual(normalize_page(2, 500), (2, 100))

    def test_total_pages(self) -> None:
        self.assertEqual(total_pages(0, 10), 0)
        self.assertEqual(total_pages(10, 10), 1)
        self.assertEqual(total_pages(11, 10), 2)


class TestCreateProduct(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryProductRepository()
        self.service = ProductService(self.repo)

    def test_create(self) -> None:
        product = self.service.create_product(_create(stock=5, category="tools"))
        self.assertEqual(product.name, "Widget")
        self.assertEqual(product.price, Decimal("9.99"))
        self.assertEqual(product.stock, 5)
        self.assertTrue(product.is_active)

    def test_validation(self) -> None:
        cases = [
            (_create(name=""), "product name is required"),
            (_create(name="ab"), "product name must be at least 3 characters"),
            (_create(name="x" * 256), "product name must be less than 255 characters"),
            (_create(price="-0.01"), "product price must be greater than or equal to 0"),
            (_create(stock=-1), "product stock must be greater than or equal to 0"),
        ]
        for data, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.create_product(data)
                self.assertEqual(ctx.exception.message, message)
        self.assertEqual(self.repo.products, {})

    def test_duplicate_name(self) -> None:
        self.service.create_product(_create())
        with self.assertRaises(AlreadyExistsError):
            self.service.create_product(_create())

    def test_name_reusable_after_delete(self) -> None:
        product = self.service.create_product(_create())
        self.service.delete_product(product.id)
        self.service.create_product(_create())


class TestListProducts(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryProductRepository()
        self.service = ProductService(self.repo)
        for i in range(1, 26):
            self.service.create_product(
                _create(
                    name=f"Product {i:02d}",
                    price=str(i),
                    category="books" if i % 2 else "games",
                    description="rare edition" if i == 7 else "",
                )
            )

    def test_page_metadata(self) -> None:
        result = self.service.list_products(None, 3, 10)
        self.assertEqual(result.total, 25)
        self.assertEqual(result.total_pages, 3)
        self.assertEqual([p.name for p in result.products], [f"Product {i}" for i in range(21, 26)])

    def test_page_size_capped(self) -> None:
        result = self.service.list_products(None, 1, 1000)
        self.assertEqual(result.page_size, 100)
        self.assertEqual(len(result.products), 25)

    def test_filters_combine(self) -> None:
        f = ProductFilter(category="games", min_price=Decimal("5"), max_price=Decimal("10"))
        result = self.service.list_products(f, 1, 10)
        self.assertEqual([p.price for p in result.products], [Decimal(n) for n in (6, 8, 10)])

    def test_search_matches_description(self) -> None:
        result = self.service.search_products("RARE", 1, 10)
        self.assertEqual([p.name for p in result.products], ["Product 07"])

    def test_search_requires_term(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.search_products("  ", 1, 10)


class TestUpdateProduct(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryProductRepository()
        self.service = ProductService(self.repo)
        self.product = self.service.create_product(_create())
        self.service.create_product(_create(name="Gadget"))

    def test_partial_update(self) -> None:
        updated = self.service.update_product(self.product.id, {"price": Decimal("1.50"), "name": None})
        self.assertEqual(updated.price, Decimal("1.50"))
        self.assertEqual(updated.name, "Widget")

    def test_rename_collision(self) -> None:
        with self.assertRaises(AlreadyExistsError):
            self.service.update_product(self.product.id, {"name": "Gadget"})

    def test_invalid_update(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.update_product(self.product.id, {"stock": -5})

    def test_update_stock(self) -> None:
        self.service.update_stock(self.product.id, 42)
        self.assertEqual(self.service.get_product(self.product.id).stock, 42)
        with self.assertRaises(ValidationError):
            self.service.update_stock(self.product.id, -1)

    def test_missing_product(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.update_product(999, {"name": "Thing"})
        with self.assertRaises(NotFoundError):
            self.service.delete_product(999)

    def test_deleted_product_not_found(self) -> None:
        self.service.delete_product(self.product.id)
        with self.assertRaises(NotFoundError):
            self.service.get_product(self.product.id)


if __name__ == "__main__":
    unittest.main()
