import logging
import tempfile
from pathlib import Path

import polars as pl
from featbin import (
    EqualFrequencyDiscretizer,
    EqualWidthDiscretizer,
    Pipeline,
    SupervisedDensityDiscretizer,
    UnsupervisedDensityDiscretizer,
    collect_numeric_values,
    equal_frequency_pipeline,
    equal_width_pipeline,
    iterative_step,
    read_csv,
    supervised_density_pipeline,
    unsupervised_density_pipeline,
)

SAMPLE_CSV = (
    "Age;Income;Student;Rating;BuysComputer\n"
    "20;Low;No;3,5;No\n"
    "25;Low;No;4,0;No\n"
    "30;High;No;7,5;Yes\n"
    "35;Medium;No;6,0;Yes\n"
    "40;High;Yes;8,5;Yes\n"
    "45;Medium;Yes;5,0;No\n"
    "50;Low;Yes;9,0;Yes\n"
    "55;High;No;2,5;No\n"
    "60;Medium;Yes;7,0;Yes\n"
    "65;Low;No;3,0;No\n"
)


def show(title, result, attribute, rows=5):
    print(f"\n{title}: cut points {result.final_cut_points}")
    for row in result.discretized_rows[:rows]:
        print(f"  {attribute}={row.attributes[attribute]!s:<18} target={row.target}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "sample_data.csv"
        path.write_text(SAMPLE_CSV)
        dataset = read_csv(path, separator=";", target="BuysComputer")

    print("Attribute types:", {k: v.value for k, v in dataset.attribute_types.items()})

    show("Equal-width (4 bins) on Age", equal_width_pipeline(n_bins=4).discretize(dataset, "Age"), "Age")
    show("Equal-frequency (3 bins) on Rating", equal_frequency_pipeline(n_bins=3).discretize(dataset, "Rating"), "Rating")
    show("Equal-width (Sturges) on Rating", equal_width_pipeline().discretize(dataset, "Rating"), "Rating")
    show("Supervised density on Age", supervised_density_pipeline().discretize(dataset, "Age"), "Age")
    show("Unsupervised density on Rating", unsupervised_density_pipeline(max_depth=2).discretize(dataset, "Rating"), "Rating")

    # Hand-assembled pipeline with a custom one-shot strategy
    def tens(context):
        lo, hi = context.numeric_values[0], context.numeric_values[-1]
        return [float(v) for v in range(int(lo // 10 + 1) * 10, int(hi), 10)]

    custom = Pipeline("Decades", [collect_numeric_values, iterative_step(tens)])
    show("Custom decades on Age", custom.discretize(dataset, "Age"), "Age")

    skipped = equal_width_pipeline().discretize(dataset, "Income")
    print("\nIncome is text, passed through:", skipped.is_passthrough, "-", skipped.error)

    # Frame-level adapters
    df = pl.DataFrame({
        "x": [1.0, 2.5, 0.5, 3.2, 2.7, 4.1, 5.0, 6.3],
        "y": ["a", "a", "a", "b", "b", "b", "b", "b"],
    })
    print("\nInput:\n", df)
    print("\nEqualWidth:\n", EqualWidthDiscretizer(["x"], n_bins=3).fit_transform(df))
    print("\nEqualFreq:\n", EqualFrequencyDiscretizer(["x"], n_bins=3, drop_original=False).fit_transform(df))
    print("\nSupervised density:\n", SupervisedDensityDiscretizer(target="y", columns=["x"]).fit_transform(df))
    print("\nUnsupervised density (bin index):\n",
          UnsupervisedDensityDiscretizer(["x"], labels_as_int=True, drop_original=False).fit_transform(df))


if __name__ == "__main__":
    main()
