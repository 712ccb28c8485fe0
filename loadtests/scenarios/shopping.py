"""Shopper load test scenario.

Sign up -> Log in -> Browse -> Fill cart -> Trim cart -> Check out -> View order.
Steps execute in order; each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import address_data, cart_item, idempotency_key, signup_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class ShoppingJourney(SequentialTaskSet):
    """Generates UserRegistered, UserLoggedIn, CartItemAdded (x2-3),
    CartItemDecremented or CartItemRemoved, OrderPlaced and CartCleared.
    """

    def on_start(self):
        self.state = ShopperState()
        self.catalogue: list[dict] = []

    @task
    def sign_up(self):
        body = signup_data()
        with self.client.post("/signup", json=body, catch_response=True, name="POST /signup") as resp:
            if resp.status_code == 200 and resp.json().get("success"):
                self.state.email = body["email"]
                self.state.password = body["password"]
            else:
                resp.failure(f"Sign-up failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def log_in(self):
        with self.client.post(
            "/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /login",
        ) as resp:
            if resp.status_code == 200 and resp.json().get("success"):
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Log-in failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/allproducts", catch_response=True, name="GET /allproducts") as resp:
            if resp.status_code == 200:
                self.catalogue = [product for product in resp.json() if product.get("available", True)]
            else:
                resp.failure(f"Listing failed: {resp.status_code}: {extract_error_detail(resp)}")

        if not self.catalogue:
            # Nothing to buy yet; start over once merchants have listed products
            self.interrupt()

    @task
    def fill_cart(self):
        picks = random.sample(self.catalogue, k=min(len(self.catalogue), random.randint(2, 3)))
        for product in picks:
            body = cart_item(product["id"], email=self.state.email)
            with self.client.post(
                "/addtocart",
                json=body,
                headers=self.state.auth_headers,
                catch_response=True,
                name="POST /addtocart",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart[product["id"]] = self.state.cart.get(product["id"], 0) + body["quantity"]
                elif resp.status_code == 404:
                    # Removed by a merchant after browsing
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def trim_cart(self):
        if not self.state.cart:
            return
        product_id = random.choice(list(self.state.cart))
        with self.client.post(
            "/removefromcart",
            json={"productId": product_id, "email": self.state.email},
            headers=self.state.auth_headers,
            catch_response=True,
            name="POST /removefromcart",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart[product_id] -= 1
                if self.state.cart[product_id] == 0:
                    del self.state.cart[product_id]
            else:
                resp.failure(f"Remove from cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def check_out(self):
        with self.client.get(
            "/cartdata",
            headers=self.state.auth_headers,
            catch_response=True,
            name="GET /cartdata",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cart read failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()
            items = resp.json()

        if not items:
            self.interrupt()

        total = sum(float(item["price"]) * item["quantity"] for item in items)
        with self.client.post(
            "/placeorder",
            json={"email": self.state.email, "address": address_data(), "totalValue": round(total, 2)},
            headers={**self.state.auth_headers, "Idempotency-Key": idempotency_key()},
            catch_response=True,
            name="POST /placeorder",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids.append(resp.json()["orderId"])
                self.state.cart.clear()
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_order(self):
        order_id = self.state.order_ids[-1]
        with self.client.get(
            f"/orders/{order_id}",
            headers=self.state.auth_headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order read failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Locust user simulating shoppers from sign-up to a placed order."""

    wait_time = between(0.5, 2.0)
    tasks = [ShoppingJourney]
