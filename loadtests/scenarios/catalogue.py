"""Catalogue load test scenarios.

A merchant journey that lists, edits and retires products with image uploads,
and a read-heavy browsing user that walks the catalogue.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import image_files, product_form
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import MerchantState


class MerchantJourney(SequentialTaskSet):
    """List -> List -> Edit (new gallery) -> Remove.

    Generates ProductAdded (x2), ProductEdited, ProductImagesReplaced and
    exercises both image release policies.
    """

    def on_start(self):
        self.state = MerchantState()

    def _add_product(self):
        with self.client.post(
            "/addproduct",
            data=product_form(),
            files=image_files(),
            catch_response=True,
            name="POST /addproduct",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_first_product(self):
        self._add_product()

    @task
    def add_second_product(self):
        self._add_product()

    @task
    def edit_with_new_gallery(self):
        product_id = self.state.product_ids[0]
        with self.client.put(
            f"/editproduct/{product_id}",
            data=product_form(),
            files=image_files(count=2),
            catch_response=True,
            name="PUT /editproduct/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Edit product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def remove_one(self):
        product_id = self.state.product_ids.pop()
        with self.client.post(
            "/removeproduct",
            json={"id": product_id},
            catch_response=True,
            name="POST /removeproduct",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class MerchantUser(HttpUser):
    """Locust user simulating catalogue maintenance."""

    wait_time = between(1.0, 3.0)
    tasks = [MerchantJourney]


class BrowsingUser(HttpUser):
    """Locust user that only reads the catalogue.

    Weighted task distribution:
    - 75% product detail pages
    - 25% full catalogue listing
    """

    wait_time = between(0.2, 1.0)

    def on_start(self):
        self.known_ids: list[int] = []

    @task(1)
    def all_products(self):
        with self.client.get("/allproducts", catch_response=True, name="GET /allproducts") as resp:
            if resp.status_code == 200:
                self.known_ids = [product["id"] for product in resp.json()]
            else:
                resp.failure(f"Listing failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task(3)
    def product_detail(self):
        if not self.known_ids:
            return
        product_id = random.choice(self.known_ids)
        with self.client.get(
            f"/product/{product_id}",
            catch_response=True,
            name="GET /product/{id}",
        ) as resp:
            # Products can be removed by merchants between listing and viewing
            if resp.status_code == 404:
                resp.success()
            elif resp.status_code != 200:
                resp.failure(f"Product detail failed: {resp.status_code}: {extract_error_detail(resp)}")
