from datetime import datetime

from stock_tracker.schemas.product import Product
from stock_tracker.utils.catalog import (
    STATUS_IN_STOCK, STATUS_LOW_STOCK, STATUS_OUT_OF_STOCK,
    filter_and_sort, is_low_stock, is_out_of_stock, last_edited_at,
    low_stock_products, out_of_stock_products, primary_quantity,
    product_types, stock_status, stock_value, to_product_out, total_quantity,
)


# --- DATA DEFAULTS ---

def test_missing_stock_fields_default_to_zero():
    product = Product.model_validate({"id": 1, "name": "Thé", "stocks": [{}, {"quantity": None}]})

    assert [s.quantity for s in product.stocks] == [0, 0]
    assert product.price is None
    assert product.edited_by == []


def test_product_without_stocks_reads_as_zero(make_product):
    product = make_product(stocks=[])

    assert primary_quantity(product) == 0
    assert total_quantity(product) == 0
    assert is_out_of_stock(product)
    assert not is_low_stock(product)
    assert stock_status(product) == STATUS_OUT_OF_STOCK


def test_null_lists_from_api_are_empty():
    product = Product.model_validate({"id": "x", "name": "Sucre", "stocks": None, "editedBy": None})

    assert product.stocks == []
    assert last_edited_at(product) is None


# --- STOCK PREDICATES ---

def test_out_of_stock_requires_every_location_empty(make_product):
    assert is_out_of_stock(make_product(stocks=[{"quantity": 0}, {"quantity": 0}]))
    assert not is_out_of_stock(make_product(stocks=[{"quantity": 0}, {"quantity": 3}]))


def test_stock_level_minimum_overrides_product_minimum(make_product):
    # Product threshold alone would flag it (5 <= 8), the stock threshold says no (5 > 2)
    product = make_product(min_quantity=8, stocks=[{"quantity": 5, "minQuantity": 2}])

    assert not is_low_stock(product)


def test_product_minimum_applies_when_stock_has_none(make_product):
    product = make_product(min_quantity=8, stocks=[{"quantity": 5}])

    assert is_low_stock(product)
    assert stock_status(product) == STATUS_LOW_STOCK


def test_no_minimum_means_never_low(make_product):
    product = make_product(stocks=[{"quantity": 1}])

    assert not is_low_stock(product)
    assert stock_status(product) == STATUS_IN_STOCK


def test_low_stock_at_any_location(make_product):
    product = make_product(stocks=[{"quantity": 50, "minQuantity": 10}, {"quantity": 10, "minQuantity": 10}])

    assert is_low_stock(product)


def test_zero_quantity_is_not_low_stock(make_product):
    product = make_product(stocks=[{"quantity": 0, "minQuantity": 10}])

    assert not is_low_stock(product)
    assert is_out_of_stock(product)


def test_stock_value_sums_all_locations(make_product):
    assert stock_value(make_product(price=2.5, stocks=[{"quantity": 4}, {"quantity": 6}])) == 25.0
    assert stock_value(make_product(price=None, stocks=[{"quantity": 4}])) == 0


# --- FILTER / SORT ---

def test_empty_query_and_all_sorts_by_last_edit_desc(make_product):
    never = make_product(name="Never edited")
    old = make_product(name="Old", edited=[0])
    recent = make_product(name="Recent", edited=[0, 90])
    middle = make_product(name="Middle", edited=[30])

    result = filter_and_sort([never, old, recent, middle], "", "all")

    assert [p.name for p in result] == ["Recent", "Middle", "Old", "Never edited"]


def test_sort_uses_last_edit_record_not_max(make_product):
    # History order is what counts: the last entry is the latest edit
    a = make_product(name="A", edited=[100, 10])
    b = make_product(name="B", edited=[50])

    assert [p.name for p in filter_and_sort([a, b])] == ["B", "A"]


def test_ties_keep_input_order(make_product):
    products = [make_product(name=f"N{i}", edited=[5]) for i in range(4)]

    assert filter_and_sort(products) == products


def test_naive_timestamps_are_read_as_utc():
    naive = Product.model_validate({"id": 1, "editedBy": [{"at": "2024-03-01T12:00:00"}]})
    aware = Product.model_validate({"id": 2, "editedBy": [{"at": "2024-03-01T13:00:00+00:00"}]})

    assert [p.id for p in filter_and_sort([naive, aware])] == [2, 1]


def test_query_matches_name_case_insensitively(make_product):
    coca = make_product(name="Coca Cola 33cl")
    fanta = make_product(name="Fanta")

    assert filter_and_sort([coca, fanta], "coca") == [coca]
    assert filter_and_sort([coca, fanta], "COLA") == [coca]


def test_query_matches_barcode_substring(make_product):
    a = make_product(name="A", barcode="6111234567890")
    b = make_product(name="B", barcode="3017620422003")

    assert filter_and_sort([a, b], "12345") == [a]


def test_barcode_match_is_verbatim(make_product):
    product = make_product(name="Savon", barcode="ABC-001")

    assert filter_and_sort([product], "ABC") == [product]
    assert filter_and_sort([product], "abc-0") == []


def test_every_result_matches_query(make_product):
    products = [
        make_product(name="Lait entier", barcode="111"),
        make_product(name="Lait écrémé", barcode="222"),
        make_product(name="Beurre", barcode="311"),
        make_product(name="Fromage", barcode="444"),
    ]

    for query in ["lait", "11", "e", "zzz", "LAIT"]:
        result = filter_and_sort(products, query)
        for p in result:
            assert query.lower() in p.name.lower() or query in p.barcode
        for p in products:
            if p not in result:
                assert query.lower() not in p.name.lower() and query not in p.barcode


def test_category_filter_is_exact(make_product):
    drink = make_product(type="Boissons")
    snack = make_product(type="Snacks")
    drink_lower = make_product(type="boissons")

    assert filter_and_sort([drink, snack, drink_lower], "", "Boissons") == [drink]
    assert len(filter_and_sort([drink, snack, drink_lower], "", "all")) == 3


def test_query_and_category_combine(make_product):
    a = make_product(name="Eau minérale", type="Boissons")
    b = make_product(name="Eau de javel", type="Entretien")

    assert filter_and_sort([a, b], "eau", "Entretien") == [b]


def test_empty_product_list():
    assert filter_and_sort([], "anything", "Snacks") == []


def test_filter_does_not_touch_input(make_product):
    products = [make_product(edited=[1]), make_product(edited=[2])]
    before = list(products)

    filter_and_sort(products, "", "all")

    assert products == before


# --- SELECTOR AND ALERTS ---

def test_product_types_keeps_first_appearance_order(make_product):
    products = [make_product(type="Snacks"), make_product(type="Boissons"), make_product(type="Snacks")]

    assert product_types(products) == ["all", "Snacks", "Boissons"]
    assert product_types([]) == ["all"]


def test_alert_lists_respect_limit(make_product):
    empty = [make_product(stocks=[{"quantity": 0}]) for _ in range(5)]
    low = [make_product(stocks=[{"quantity": 1, "minQuantity": 3}]) for _ in range(2)]
    products = empty + low

    assert out_of_stock_products(products, 3) == empty[:3]
    assert out_of_stock_products(products) == empty
    assert low_stock_products(products, 3) == low


def test_product_out_uses_primary_location(make_product):
    product = make_product(
        price=12.5,
        min_quantity=4,
        stocks=[{"quantity": 3, "minQuantity": 5}, {"quantity": 40}],
        edited=[15],
    )

    out = to_product_out(product)

    assert out.quantity == 3
    assert out.min_quantity == 5
    assert out.status == STATUS_LOW_STOCK
    assert isinstance(out.last_edited_at, datetime)


# --- LOOSE API VALUES ---

def test_numeric_location_is_accepted():
    product = Product.model_validate({"id": 1, "stocks": [{"quantity": 3, "location": 7}]})

    assert product.stocks[0].location == 7
    assert primary_quantity(product) == 3


def test_numeric_barcode_becomes_text():
    product = Product.model_validate({"id": 1, "name": "Huile", "barcode": 6111234567890})

    assert product.barcode == "6111234567890"
    assert filter_and_sort([product], "1234") == [product]


def test_blank_edit_timestamp_sorts_as_never_edited(make_product):
    blank = Product.model_validate({"id": "blank", "editedBy": [{"at": ""}]})
    spaces = Product.model_validate({"id": "spaces", "editedBy": [{"at": "  "}]})
    edited = make_product(edited=[0])

    assert blank.edited_by[0].at is None
    assert last_edited_at(spaces) is None
    assert filter_and_sort([blank, edited, spaces]) == [edited, blank, spaces]
