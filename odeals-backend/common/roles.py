from django.db import models


class UserType(models.TextChoices):
    CONSUMER = "consumer", "Consumer"
    PARTNER  = "partner",  "Partner"


class BusinessCategory(models.TextChoices):
    FOOD            = "Food",            "Food"
    MENS_APPAREL    = "Men's Apparel",   "Men's Apparel"
    WOMENS_APPAREL  = "Women's Apparel", "Women's Apparel"
    KIDS_WEAR       = "Kids Wear",       "Kids Wear"
    AUTOMOBILE      = "Automobile",      "Automobile"
    JEWELLERY       = "Jewellery",       "Jewellery"
    MENS_SALON      = "Men's Salon",     "Men's Salon"
    WOMENS_SALON    = "Women's Salon",   "Women's Salon"
