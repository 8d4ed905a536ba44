CHILDREN_CATEGORY_ID = 3

# Height-based children sizes, 92 cm (2 years) to 164 cm
CHILDREN_SIZES = ("92", "98", "104", "110", "116", "122",
                  "128", "134", "140", "146", "152", "158", "164")

ADULT_SIZES = ("XS", "S", "M", "L", "XL", "XXL", "XXXL")

# Adult sizes stored together with the height, e.g. "M 170"
GROWTH_SIZES = ("XS 160", "XS 170", "S 160", "S 170",
                "M 160", "M 170", "L 160", "L 170")

UNKNOWN_PRODUCT_NAME = "Unknown product"
NO_COLOR_NAME = "No color"
