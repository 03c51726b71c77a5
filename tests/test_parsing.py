from dishlens.orchestrator.contracts import DEFAULT_REGION, UNIDENTIFIED_DISH, UNKNOWN_DISH
from dishlens.orchestrator.parsing import (
    PATH_JSON,
    PATH_PLACEHOLDER,
    PATH_SCRAPE,
    extract_section,
    normalize_with_path,
)

TACOS = '{"name":"Tacos","region":"Mexico","ingredients":["corn"],"instructions":["cook"],"funFacts":["old"]}'
TACOS_NO_REGION = '{"name":"Tacos","ingredients":["corn"],"instructions":["cook"],"funFacts":["old"]}'
PIZZA_TEXT = "Name: Pizza\nRegion: Italy\nIngredients\n- Flour\n- Cheese\nInstructions\n1. Mix\n2. Bake"


def normalize(text):
    return normalize_with_path(text)[0]


def test_json_embedded_in_prose():
    result, path = normalize_with_path(f"Sure! Here is the dish you asked about:\n{TACOS}\nEnjoy your meal.")
    assert path == PATH_JSON
    assert result.to_dict() == {
        "name": "Tacos",
        "region": "Mexico",
        "ingredients": ["corn"],
        "instructions": ["cook"],
        "funFacts": ["old"],
    }


def test_json_inside_markdown_fence():
    result = normalize(f"```json\n{TACOS}\n```")
    assert result.name == "Tacos"
    assert result.region == "Mexico"


def test_missing_region_is_defaulted():
    result, path = normalize_with_path(TACOS_NO_REGION)
    assert path == PATH_JSON
    assert result.region == DEFAULT_REGION
    assert result.ingredients == ["corn"]


def test_empty_region_is_defaulted():
    result = normalize(TACOS.replace('"Mexico"', '""'))
    assert result.region == DEFAULT_REGION


def test_wrong_shape_falls_through_to_scrape():
    # ingredients is a string, so the JSON object is rejected
    reply = '{"name": "Soup", "ingredients": "water", "instructions": [], "funFacts": []}\nName: Soup\nIngredients\n- Water'
    result, path = normalize_with_path(reply)
    assert path == PATH_SCRAPE
    assert result.name == "Soup"
    assert result.ingredients == ["Water"]


def test_null_region_fails_shape_check():
    reply = TACOS.replace('"Mexico"', "null")
    _, path = normalize_with_path(reply)
    assert path != PATH_JSON


def test_invalid_json_falls_through():
    _, path = normalize_with_path("{not json at all}\nName: Ramen")
    assert path == PATH_SCRAPE


def test_json_list_items_are_strings():
    reply = '{"name":"Pho","region":"Vietnam","ingredients":["broth",2],"instructions":[],"funFacts":[]}'
    assert normalize(reply).ingredients == ["broth", "2"]


def test_heuristic_sections():
    result, path = normalize_with_path(PIZZA_TEXT)
    assert path == PATH_SCRAPE
    assert result.name == "Pizza"
    assert result.region == "Italy"
    assert result.ingredients == ["Flour", "Cheese"]
    assert result.instructions == ["Mix", "Bake"]
    assert result.fun_facts == []


def test_heuristic_labels_with_markdown():
    reply = "**Name:** Bibimbap\n## Region: Korea\n\nIngredients:\n\n• Rice\n• Gochujang\n\nFun Facts\n- Means mixed rice"
    result = normalize(reply)
    assert result.name == "Bibimbap"
    assert result.region == "Korea"
    assert result.ingredients == ["Rice", "Gochujang"]
    assert result.fun_facts == ["Means mixed rice"]


def test_heuristic_label_is_case_insensitive_and_whole_word():
    reply = "Named after the pan it is cooked in\nNAME: Paella\nRegIon: Valencia"
    result = normalize(reply)
    assert result.name == "Paella"
    assert result.region == "Valencia"


def test_heuristic_label_after_words_needs_colon():
    reply = "**Dish Name:** Pad Thai\nCuisine Region: Thailand\n\nFun Facts\n- National dish since the 1930s"
    result, path = normalize_with_path(reply)
    assert path == PATH_SCRAPE
    assert result.name == "Pad Thai"
    assert result.region == "Thailand"
    assert result.fun_facts == ["National dish since the 1930s"]


def test_heuristic_prose_mentioning_label_is_ignored():
    reply = "The name of this dish is hard to tell\nThis region is known for rice\nCuisine Region: Sichuan\nIngredients\n- Rice"
    result = normalize(reply)
    assert result.name == UNKNOWN_DISH
    assert result.region == "Sichuan"


def test_heuristic_defaults_when_labels_missing():
    result = normalize("Ingredients\n- Rice\n- Beans")
    assert result.name == UNKNOWN_DISH
    assert result.region == DEFAULT_REGION
    assert result.ingredients == ["Rice", "Beans"]


def test_section_run_ends_at_first_plain_line():
    text = "Ingredients\n- Egg\nsome commentary\n- Not an ingredient"
    assert extract_section(text, "Ingredients") == ["Egg"]


def test_section_label_is_case_sensitive():
    assert extract_section("ingredients\n- Egg", "Ingredients") == []


def test_each_section_rescans_from_its_own_label():
    text = "Instructions\n1. Boil\nIngredients\n- Pasta\n"
    assert extract_section(text, "Ingredients") == ["Pasta"]
    assert extract_section(text, "Instructions") == ["Boil"]


def test_empty_bullets_are_dropped():
    assert extract_section("Fun Facts\n-\n- Real fact\n", "Fun Facts") == ["Real fact"]


def test_last_resort_placeholder():
    result, path = normalize_with_path("I'm not sure what this is, the picture is blurry.")
    assert path == PATH_PLACEHOLDER
    assert result.name == UNIDENTIFIED_DISH
    assert result.region == DEFAULT_REGION
    assert result.ingredients == []
    assert result.instructions == ["No instructions available"]
    assert result.fun_facts == ["No information available"]


def test_fun_facts_alone_are_not_enough():
    _, path = normalize_with_path("Fun Facts\n- It is orange")
    assert path == PATH_PLACEHOLDER


def test_every_path_yields_name_and_lists():
    for reply in (TACOS, TACOS_NO_REGION, PIZZA_TEXT, "", "???", "{}", "[1, 2]"):
        data = normalize(reply).to_dict()
        assert isinstance(data["name"], str) and data["name"]
        for key in ("ingredients", "instructions", "funFacts"):
            assert isinstance(data[key], list)
