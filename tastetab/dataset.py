# tastetab/dataset.py
# Starter menu loaded by POST /api/insert-items.

MENU_ITEMS = [
    {
        "name": "Masala Dosa",
        "category": "Breakfast",
        "price": 80,
        "imageUrl": "https://images.tastetab.app/masala-dosa.jpg",
        "openTime": "07:00 AM",
        "closeTime": "11:30 AM",
    },
    {
        "name": "Idli Vada",
        "category": "Breakfast",
        "price": 60,
        "imageUrl": "https://images.tastetab.app/idli-vada.jpg",
        "openTime": "07:00 AM",
        "closeTime": "11:30 AM",
    },
    {
        "name": "Veg Meals",
        "category": "Lunch",
        "price": 120,
        "imageUrl": "https://images.tastetab.app/veg-meals.jpg",
        "openTime": "12:00 PM",
        "closeTime": "03:00 PM",
    },
    {
        "name": "Chicken Biryani",
        "category": "Lunch",
        "price": 180,
        "imageUrl": "https://images.tastetab.app/chicken-biryani.jpg",
        "openTime": "12:00 PM",
        "closeTime": "03:30 PM",
    },
    {
        "name": "Samosa",
        "category": "Snacks",
        "price": 20,
        "imageUrl": "https://images.tastetab.app/samosa.jpg",
        "openTime": "03:30 PM",
        "closeTime": "07:00 PM",
    },
    {
        "name": "Filter Coffee",
        "category": "Beverages",
        "price": 25,
        "imageUrl": "https://images.tastetab.app/filter-coffee.jpg",
        "openTime": "07:00 AM",
        "closeTime": "09:00 PM",
    },
    {
        "name": "Parotta Kurma",
        "category": "Dinner",
        "price": 90,
        "imageUrl": "https://images.tastetab.app/parotta-kurma.jpg",
        "openTime": "07:00 PM",
        "closeTime": "10:30 PM",
    },
]
