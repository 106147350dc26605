PASSWORD = "Str0ng!Pass"
DESCRIPTION = ("Systems design fundamentals. " * 3).strip()


def course_details(**overrides):
    details = {
        "title": "Intro to Systems Design",
        "description": DESCRIPTION,
        "price": 4999,
        "image_link": "https://x.com/a.png",
        "published": True,
    }
    details.update(overrides)
    return details
