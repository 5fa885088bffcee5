from __future__ import annotations

from fittrack.repositories import FoodRepo


# name, serving_size, serving_unit, calories, protein_g, carbs_g, fat_g, fiber_g, category, tags
SAMPLE_FOODS: list[tuple[str, float, str, float, float, float, float, float, str, list[str]]] = [
    ("Grilled Chicken Breast", 100, "g", 165, 31, 0, 3.6, 0, "meat", ["high-protein", "low-carb"]),
    ("Beef Steak", 100, "g", 271, 25, 0, 18, 0, "meat", ["high-protein"]),
    ("Turkey Breast", 100, "g", 135, 29, 0, 1, 0, "meat", ["high-protein", "low-fat"]),
    ("Lamb Chop", 100, "g", 294, 25, 0, 21, 0, "meat", ["high-protein"]),
    ("Chicken Thigh", 100, "g", 209, 26, 0, 11, 0, "meat", ["protein"]),
    ("Salmon Fillet", 100, "g", 208, 20, 0, 13, 0, "fish", ["omega-3", "high-protein"]),
    ("Tuna", 100, "g", 132, 28, 0, 1, 0, "fish", ["high-protein"]),
    ("Shrimp", 100, "g", 99, 24, 0, 0.3, 0, "fish", ["low-fat", "high-protein"]),
    ("Cod", 100, "g", 82, 18, 0, 0.7, 0, "fish", ["low-fat", "protein"]),
    ("Mackerel", 100, "g", 205, 19, 0, 13, 0, "fish", ["omega-3"]),
    ("Brown Rice", 100, "g", 112, 2.6, 24, 0.9, 1.8, "grains", ["carbs"]),
    ("White Rice", 100, "g", 130, 2.4, 28, 0.3, 0.4, "grains", ["carbs"]),
    ("Oatmeal", 100, "g", 389, 17, 66, 7, 11, "grains", ["fiber", "breakfast"]),
    ("Lentils", 100, "g", 116, 9, 20, 0.4, 8, "legumes", ["fiber", "protein"]),
    ("Chickpeas", 100, "g", 164, 9, 27, 2.6, 7.6, "legumes", ["fiber", "protein"]),
    ("Broccoli", 100, "g", 34, 2.8, 7, 0.4, 2.6, "vegetables", ["low-calorie"]),
    ("Spinach", 100, "g", 23, 2.9, 3.6, 0.4, 2.2, "vegetables", ["iron", "low-calorie"]),
    ("Carrot", 100, "g", 41, 0.9, 10, 0.2, 2.8, "vegetables", ["vitamin-A", "low-calorie"]),
    ("Tomato", 100, "g", 18, 0.9, 3.9, 0.2, 1.2, "vegetables", ["vitamin-C"]),
    ("Cucumber", 100, "g", 16, 0.7, 3.6, 0.1, 0.5, "vegetables", ["low-calorie"]),
    ("Banana", 100, "g", 89, 1.1, 23, 0.3, 2.6, "fruits", ["natural-sugar"]),
    ("Apple", 100, "g", 52, 0.3, 14, 0.2, 2.4, "fruits", ["low-fat", "fiber"]),
    ("Orange", 100, "g", 47, 0.9, 12, 0.1, 2.4, "fruits", ["vitamin-C"]),
    ("Strawberry", 100, "g", 33, 0.7, 8, 0.3, 2, "fruits", ["antioxidants"]),
    ("Grapes", 100, "g", 69, 0.7, 18, 0.2, 0.9, "fruits", ["natural-sugar"]),
    ("Almonds", 100, "g", 579, 21, 22, 50, 12, "nuts", ["healthy-fats"]),
    ("Walnuts", 100, "g", 654, 15, 14, 65, 7, "nuts", ["omega-3"]),
    ("Cashews", 100, "g", 553, 18, 30, 44, 3.3, "nuts", ["healthy-fats"]),
    ("Peanuts", 100, "g", 567, 26, 16, 49, 8.5, "nuts", ["healthy-fats"]),
    ("Chia Seeds", 100, "g", 486, 17, 42, 31, 34, "seeds", ["fiber", "omega-3"]),
    ("Greek Yogurt", 100, "g", 59, 10, 3.6, 0.4, 0, "dairy", ["high-protein", "low-fat"]),
    ("Milk", 100, "ml", 42, 3.4, 5, 1, 0, "dairy", ["calcium"]),
    ("Cheddar Cheese", 100, "g", 403, 25, 1.3, 33, 0, "dairy", ["high-fat", "protein"]),
    ("Cottage Cheese", 100, "g", 98, 11, 3.4, 4.3, 0, "dairy", ["low-fat", "protein"]),
    ("Butter", 100, "g", 717, 0.9, 0.1, 81, 0, "dairy", ["high-fat"]),
    ("Egg", 50, "g", 78, 6, 0.6, 5, 0, "dairy", ["high-protein"]),
    ("Egg White", 100, "g", 52, 11, 0.7, 0.2, 0, "dairy", ["high-protein", "low-fat"]),
    ("Green Tea", 200, "ml", 2, 0, 0, 0, 0, "beverages", ["antioxidants"]),
    ("Black Coffee", 200, "ml", 2, 0.3, 0, 0, 0, "beverages", ["caffeine"]),
    ("Orange Juice", 200, "ml", 85, 1.7, 20, 0.2, 0.5, "beverages", ["vitamin-C"]),
    ("Almond Milk", 200, "ml", 39, 1, 3.4, 2.5, 0.8, "beverages", ["low-calorie"]),
    ("Protein Bar", 50, "g", 200, 20, 18, 7, 3, "snacks", ["high-protein"]),
    ("Rice Cake", 20, "g", 77, 1.5, 16, 0.1, 0.2, "snacks", ["low-calorie"]),
    ("Beef Jerky", 28, "g", 116, 9.4, 3.1, 7.3, 0, "snacks", ["high-protein"]),
    ("Popcorn", 100, "g", 387, 12, 78, 4.3, 15, "snacks", ["fiber"]),
    ("Dark Chocolate", 100, "g", 546, 4.9, 61, 31, 7, "snacks", ["antioxidants"]),
    ("Sunflower Seeds", 100, "g", 584, 21, 20, 51, 8.6, "seeds", ["healthy-fats"]),
    ("Pumpkin Seeds", 100, "g", 559, 30, 10, 49, 6, "seeds", ["protein", "healthy-fats"]),
    ("Flax Seeds", 100, "g", 534, 18, 29, 42, 27, "seeds", ["omega-3", "fiber"]),
    ("Honey", 100, "g", 304, 0.3, 82, 0, 0.2, "sweeteners", ["natural-sugar"]),
]


def sample_food_fields() -> list[dict]:
    out: list[dict] = []
    for name, size, unit, kcal, p, c, f, fiber, category, tags in SAMPLE_FOODS:
        out.append(
            {
                "name": name,
                "serving_size": float(size),
                "serving_unit": unit,
                "calories": float(kcal),
                "protein_g": float(p),
                "carbs_g": float(c),
                "fat_g": float(f),
                "fiber_g": float(fiber),
                "category": category,
                "tags": list(tags),
            }
        )
    return out


async def seed_foods(repo: FoodRepo) -> int:
    """Insert the sample foods into an empty food table. Returns how many were added."""
    if await repo.count() > 0:
        return 0
    rows = sample_food_fields()
    for fields in rows:
        await repo.add(fields)
    return len(rows)
