from backend.cooklang.services.ingredients import aggregate_ingredients
from backend.cooklang.services.recipe_parser import parse


def test_amounts_are_summed_per_ingredient_and_unit():
    recipe = parse(
        "Mix @flour{100%g} with @salt\n"
        "Add @flour{50%g} and @salt{1/2%tsp}\n"
        "Finish with @salt{1/4%tsp} and @flour{1%cup}\n"
    )
    totals = aggregate_ingredients(recipe)

    assert [(t.name, t.mentions) for t in totals] == [
        ("flour", 2),
        ("salt", 1),
        ("salt", 2),
        ("flour", 1),
    ]
    assert totals[0].amount.quantity.components == (150,)
    assert totals[0].amount.unit == "g"
    assert totals[1].amount is None
    assert totals[2].amount.quantity.components == (3, 4)
    assert totals[3].amount.unit == "cup"


def test_alternatives_are_summed_pairwise():
    recipe = parse("@rice{1|2%cup} then @rice{1|2%cup}")
    [total] = aggregate_ingredients(recipe)
    assert [q.components for q in total.amount.alternatives] == [(2,), (4,)]


def test_description_is_part_of_the_name():
    recipe = parse("@olive oil{1%tbsp} and @oil{1%tbsp}")
    assert [t.name for t in aggregate_ingredients(recipe)] == ["olive oil", "oil"]
