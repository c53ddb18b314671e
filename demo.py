#!/usr/bin/env python
from sdk.pyshowroom import ShowroomClient

def main():
    c = ShowroomClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Featured vehicles, both languages
    # -----------------------------
    print("Featured (en, USD)...")
    print(c.featured(lang="en", currency="USD"))
    print("\nFeatured (ar, EGP)...")
    print(c.featured(lang="ar", currency="EGP"))

    # -----------------------------
    # Inventory search
    # -----------------------------
    print("\nSearching inventory for 'bmw'...")
    vehicles = c.list_catalog(q="bmw")
    print(vehicles)

    # -----------------------------
    # Vehicle details
    # -----------------------------
    if vehicles:
        vid = vehicles[0]["id"]
        print(f"\nDetails for vehicle {vid} (ar)...")
        print(c.get_vehicle(vid, lang="ar"))

    # -----------------------------
    # Translation proxies
    # -----------------------------
    print("\nTranslating a single string...")
    print(c.translate_text("Automatic"))

    print("\nTranslating several strings...")
    print(c.translate_text(["Automatic", "Petrol", "12,000 km"]))

    print("\nTranslating a product...")
    print(c.translate_product(
        "BMW X5 2022",
        "Luxury SUV in excellent condition.",
        {"mileage": "12,000 km", "transmission": "Automatic", "fuel": "Petrol"},
    ))

    # -----------------------------
    # Contact form
    # -----------------------------
    print("\nSending an inquiry...")
    print(c.submit_inquiry("Alice", "alice@example.com", vehicle_name="BMW X5 2022",
                           message="Is this still available?"))

if __name__ == "__main__":
    main()
