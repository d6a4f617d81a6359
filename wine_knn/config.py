# Label column; every other column in the raw table is a predictor.
TARGET_COL = "cultivar"

# Frozen validation protocol
TRAIN_PROP = 0.75
TEST_SIZE = 1.0 - TRAIN_PROP
CV_FOLDS = 5
SEED = 123
K_MIN = 1
K_MAX = 20
K_GRID = list(range(K_MIN, K_MAX + 1))
PRIMARY_METRIC = "accuracy"

# "uniform" is the rectangular kernel: every neighbor votes with equal weight.
KNN_WEIGHTS = "uniform"
KNN_WEIGHT_CHOICES = ["uniform", "distance"]

# Artifacts written to --output_dir
ACCURACY_PLOT_FILE = "accuracy_plot.png"
ACCURACY_SCORE_FILE = "accuracy_score.csv"
CONFUSION_TABLE_FILE = "metrics.csv"
CV_ACCURACY_FILE = "cv_accuracy.csv"
CLASS_METRICS_FILE = "class_metrics.csv"
RUN_METADATA_FILE = "run_metadata.json"
MODEL_FILE = "knn_model.joblib"

# Figure size in inches (width, height)
ACCURACY_PLOT_SIZE = (10, 3)
FIGURE_DPI = 300
