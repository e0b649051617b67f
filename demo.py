#!/usr/bin/env python
from storesdk.client import StoreClient


def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    keyboard = c.create_product("Mechanical Keyboard", 349.9, "RGB keyboard with blue switches", "img/keyboard.png")
    headset = c.create_product("Headset 7.1", 499.0, "Surround headset for long sessions", "img/headset.png")
    print(keyboard)
    print(headset)

    # -----------------------------
    # List, search and sort
    # -----------------------------
    print("\nListing products sorted by name...")
    print(c.list_products(sort="name"))

    print("\nSearching for 'surround'...")
    print(c.list_products(search="surround"))

    # -----------------------------
    # Update and replace
    # -----------------------------
    print("\nDiscounting the keyboard...")
    print(c.update_product(keyboard["id"], price=299.9))

    print("\nReplacing the headset record...")
    print(c.replace_product(headset["id"], "Headset 7.1 Pro", 549.0, "Wireless surround headset", "img/headset-pro.png"))

    # -----------------------------
    # Users: signup and login lookup
    # -----------------------------
    print("\nRegistering users...")
    print(c.create_user("admin@loja.com", "admin123", "manager"))
    print(c.create_user("player@loja.com", "gg", "customer"))

    print("\nLogging in as ADMIN@loja.com...")
    print(c.find_users(email="ADMIN@loja.com", password="admin123"))

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the headset...")
    print(c.delete_product(headset["id"]))
    print("Fetch after delete:", c.get_product(headset["id"]))


if __name__ == "__main__":
    main()
