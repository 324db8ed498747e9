"""
Barangays of Manolo Fortich, Bukidnon.

Each entry is one polygon ring of (lat, lng) vertices plus a centroid. The
list order is the catalog order used by the classifier.
"""

MUNICIPALITY = "Manolo Fortich"

BARANGAYS = [
    {
        "name": "Agusan Canyon",
        "ring": [
            (8.3721, 124.8134),
            (8.3821, 124.8334),
            (8.3621, 124.8434),
            (8.3521, 124.8234),
            (8.3621, 124.8034),
        ],
        "centroid": (8.3721, 124.8234),
    },
    {
        "name": "Alae",
        "ring": [
            (8.4302, 124.8856),
            (8.4502, 124.9056),
            (8.4502, 124.9256),
            (8.4302, 124.9256),
            (8.4202, 124.9056),
        ],
        "centroid": (8.4402, 124.9056),
    },
    {
        "name": "Dahilayan",
        "ring": [
            (8.4489, 124.8634),
            (8.4689, 124.8834),
            (8.4689, 124.9034),
            (8.4489, 124.9034),
            (8.4389, 124.8834),
        ],
        "centroid": (8.4589, 124.8834),
    },
    {
        "name": "Dalirig",
        "ring": [
            (8.3923, 124.9012),
            (8.4123, 124.9212),
            (8.4123, 124.9412),
            (8.3923, 124.9412),
            (8.3823, 124.9212),
        ],
        "centroid": (8.4023, 124.9212),
    },
    {
        "name": "Damilag",
        "ring": [
            (8.3693, 124.8564),
            (8.3893, 124.8764),
            (8.3893, 124.8964),
            (8.3693, 124.8964),
            (8.3593, 124.8764),
        ],
        "centroid": (8.3793, 124.8764),
    },
    {
        "name": "Dicklum",
        "ring": [
            (8.3734, 124.8123),
            (8.3934, 124.8323),
            (8.3934, 124.8523),
            (8.3734, 124.8523),
            (8.3634, 124.8323),
        ],
        "centroid": (8.3834, 124.8323),
    },
    {
        "name": "Guilang-guilang",
        "ring": [
            (8.3812, 124.8423),
            (8.4012, 124.8623),
            (8.4012, 124.8823),
            (8.3812, 124.8823),
            (8.3712, 124.8623),
        ],
        "centroid": (8.3912, 124.8623),
    },
    {
        "name": "Kalugmanan",
        "ring": [
            (8.4156, 124.8967),
            (8.4356, 124.9167),
            (8.4356, 124.9367),
            (8.4156, 124.9367),
            (8.4056, 124.9167),
        ],
        "centroid": (8.4256, 124.9167),
    },
    {
        "name": "Lindaban",
        "ring": [
            (8.3567, 124.8145),
            (8.3767, 124.8345),
            (8.3767, 124.8545),
            (8.3567, 124.8545),
            (8.3467, 124.8345),
        ],
        "centroid": (8.3667, 124.8345),
    },
    {
        "name": "Lingion",
        "ring": [
            (8.3234, 124.7923),
            (8.3434, 124.8123),
            (8.3434, 124.8323),
            (8.3234, 124.8323),
            (8.3134, 124.8123),
        ],
        "centroid": (8.3334, 124.8123),
    },
    {
        "name": "Lunocan",
        "ring": [
            (8.3145, 124.7834),
            (8.3345, 124.8034),
            (8.3345, 124.8234),
            (8.3145, 124.8234),
            (8.3045, 124.8034),
        ],
        "centroid": (8.3245, 124.8034),
    },
    {
        "name": "Maluko",
        "ring": [
            (8.2923, 124.7656),
            (8.3123, 124.7856),
            (8.3123, 124.8056),
            (8.2923, 124.8056),
            (8.2823, 124.7856),
        ],
        "centroid": (8.3023, 124.7856),
    },
    {
        "name": "Mambatangan",
        "ring": [
            (8.2812, 124.7534),
            (8.3012, 124.7734),
            (8.3012, 124.7934),
            (8.2812, 124.7934),
            (8.2712, 124.7734),
        ],
        "centroid": (8.2912, 124.7734),
    },
    {
        "name": "Mampayag",
        "ring": [
            (8.3345, 124.8089),
            (8.3545, 124.8289),
            (8.3545, 124.8489),
            (8.3345, 124.8489),
            (8.3245, 124.8289),
        ],
        "centroid": (8.3445, 124.8289),
    },
    {
        "name": "Mantibugao",
        "ring": [
            (8.3456, 124.8234),
            (8.3656, 124.8434),
            (8.3656, 124.8634),
            (8.3456, 124.8634),
            (8.3356, 124.8434),
        ],
        "centroid": (8.3556, 124.8434),
    },
    {
        "name": "Minsuro",
        "ring": [
            (8.3678, 124.8456),
            (8.3878, 124.8656),
            (8.3878, 124.8856),
            (8.3678, 124.8856),
            (8.3578, 124.8656),
        ],
        "centroid": (8.3778, 124.8656),
    },
    {
        "name": "San Miguel",
        "ring": [
            (8.3823, 124.8678),
            (8.4023, 124.8878),
            (8.4023, 124.9078),
            (8.3823, 124.9078),
            (8.3723, 124.8878),
        ],
        "centroid": (8.3923, 124.8878),
    },
    {
        "name": "Sankanan",
        "ring": [
            (8.3945, 124.8789),
            (8.4145, 124.8989),
            (8.4145, 124.9189),
            (8.3945, 124.9189),
            (8.3845, 124.8989),
        ],
        "centroid": (8.4045, 124.8989),
    },
    {
        "name": "Santiago",
        "ring": [
            (8.4067, 124.8923),
            (8.4267, 124.9123),
            (8.4267, 124.9323),
            (8.4067, 124.9323),
            (8.3967, 124.9123),
        ],
        "centroid": (8.4167, 124.9123),
    },
    {
        "name": "Santo Niño",
        "ring": [
            (8.4189, 124.9056),
            (8.4389, 124.9256),
            (8.4389, 124.9456),
            (8.4189, 124.9456),
            (8.4089, 124.9256),
        ],
        "centroid": (8.4289, 124.9256),
    },
    {
        "name": "Tankulan",
        "ring": [
            (8.4312, 124.9189),
            (8.4512, 124.9389),
            (8.4512, 124.9589),
            (8.4312, 124.9589),
            (8.4212, 124.9389),
        ],
        "centroid": (8.4412, 124.9389),
    },
    {
        "name": "Ticala",
        "ring": [
            (8.4445, 124.9323),
            (8.4645, 124.9523),
            (8.4645, 124.9723),
            (8.4445, 124.9723),
            (8.4345, 124.9523),
        ],
        "centroid": (8.4545, 124.9523),
    },
]
