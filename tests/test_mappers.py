import pytest

from storefront.domain.services.mappers import (
    PLACEHOLDER_IMAGE,
    map_categories,
    map_company_details,
    map_product,
    parse_images,
)


def _api_product(pid=1, **kw):
    base = {
        "productId": pid,
        "productName": f"Product {pid}",
        "productInfo": "tasty",
        "productPrice": "150",
        "productImage": "https://img/a.jpg&&&https://img/b.jpg",
        "productDeliveryCost": "20",
    }
    base.update(kw)
    return base


def test_parse_images_drops_blanks_and_placeholder():
    raw = f"https://img/a.jpg&&& &&&{PLACEHOLDER_IMAGE}&&&https://img/b.jpg"
    assert parse_images(raw) == ["https://img/a.jpg", "https://img/b.jpg"]
    assert parse_images(None) == []


def test_map_product_basic_fields():
    p = map_product(_api_product(7), delivery_time="1 Day")
    assert p.id == "7"
    assert p.price == 150.0
    assert p.images == ["https://img/a.jpg", "https://img/b.jpg"]
    assert p.image_url == "https://img/a.jpg"
    assert p.delivery_time == "1 Day"
    assert p.delivery_cost == 20.0
    assert p.rating == 0.0


def test_map_product_prefers_first_size_price_and_averages_ratings():
    p = map_product(_api_product(
        productSize=[
            {"productSizeId": 1, "productSizePrice": 90, "size": "250g", "sizeQuantity": "4"},
            {"productSizeId": 2, "productSizePrice": 170, "size": "500g"},
        ],
        productRatings=[{"productRating": 4}, {"productRating": 5}],
    ))
    assert p.price == 90.0
    assert [o.quantity for o in p.pricing] == ["250g", "500g"]
    assert p.pricing[0].size_quantity == 4
    assert p.rating == pytest.approx(4.5)


def test_bulk_categories_with_nested_catalogues():
    cats = map_categories([
        {"categoryId": 1, "categoryName": "Sweets", "catalogues": [
            {"catalogueId": 10, "catalogueName": "Ladoo", "products": [_api_product(100)]},
        ]},
        {"categoryId": 2, "categoryName": "Pickles"},
    ])
    assert [c.id for c in cats] == ["1", "2"]
    assert cats[0].catalogs[0].products[0].id == "100"
    assert cats[1].is_skeleton


def test_flat_catalogue_items_are_grouped_by_category():
    cats = map_categories([
        {"categoryId": 1, "categoryName": "Sweets", "catalogueId": 10, "catalogueName": "Ladoo",
         "products": [_api_product(100)]},
        {"categoryId": 1, "categoryName": "Sweets", "catalogueId": 11, "catalogueName": "Barfi",
         "products": [_api_product(101)]},
    ])
    assert len(cats) == 1
    assert [c.id for c in cats[0].catalogs] == ["10", "11"]


def test_products_directly_under_category_get_default_catalog():
    cats = map_categories([{"categoryId": 3, "categoryName": "Snacks", "products": [_api_product(5)]}])
    assert cats[0].catalogs[0].id == "default-3"
    assert cats[0].catalogs[0].name == "All Products"


def test_items_without_category_id_are_skipped():
    assert map_categories([{"categoryName": "orphan"}]) == []


def test_company_details_keep_unknown_fields():
    details = map_company_details({"companyId": 9, "companyName": "Babai", "companyDomain": "babaihomefoods",
                                   "gstNumber": "XYZ"})
    assert details.company_id == "9"
    assert details.company_domain == "babaihomefoods"
    assert details.model_extra == {"gstNumber": "XYZ"}
    assert map_company_details({"companyName": "no id"}) is None


def test_reviews_size_colours_and_detail_fields():
    p = map_product(_api_product(
        productRatings=[{"productRatingId": 3, "productRating": 5, "productReview": "Lovely",
                         "createdAt": "2024-05-01T10:00:00Z"}],
        productSize=[{"productSizeId": 1, "productSizePrice": 90, "size": "250g", "productSizeColours": [
            {"productSizeColourId": 8, "colourName": "Red", "colourPrice": "95",
             "productPics": "https://img/red.jpg", "productSizeColourQuantity": "2", "sizeColourStatus": "ACTIVE"},
        ]}],
        productColour=[{"productColourId": 4, "colour": "Red", "productPics": "https://img/red.jpg"}],
        productOffer=10, productType="VEG", productIng="gram flour, ghee", productBestBefore="30 days",
    ))
    assert p.reviews[0].id == "3"
    assert p.reviews[0].author == "Verified User"
    assert p.reviews[0].text == "Lovely"
    assert p.reviews[0].date == "2024-05-01"
    colour = p.pricing[0].size_colours[0]
    assert (colour.name, colour.price, colour.quantity, colour.images) == ("Red", 95.0, 2, ["https://img/red.jpg"])
    assert p.colors[0].name == "Red"
    assert p.product_offer == "10"
    assert p.product_type == "VEG"
    assert p.ingredients == "gram flour, ghee"
    assert p.best_before == "30 days"


def test_malformed_lists_and_scalars_are_tolerated():
    p = map_product(_api_product(productRatings=[4, "5"], productSize=["oops"], productColour="red"))
    assert p.rating == pytest.approx(4.5)
    assert p.reviews == []
    assert p.pricing == []
    assert p.price == 150.0
    assert p.colors == []


def test_numeric_company_delivery_time_is_coerced():
    details = map_company_details({"companyId": 5, "deliveryTime": 2})
    assert details.delivery_time == "2"
