# pawpal/api/health/guidelines.py
# 건강 관리 가이드 화면에 표시되는 정적 데이터 (카테고리별 아이콘, 색상, 참고 링크, 팁)

HEALTH_GUIDELINES = [
    {
        "category": "Vaccinations",
        "icon": "vaccines",
        "color": "#896C6C",
        "web_url": "https://www.avma.org/resources/pet-owners/petcare/vaccinations",
        "tips": [
            "Core vaccines: DHPP (Distemper, Hepatitis, Parvovirus, Parainfluenza)",
            "Rabies vaccination required by law in most areas",
            "Annual boosters recommended for adult pets",
            "Puppies need series of vaccinations starting at 6-8 weeks",
            "Keep vaccination records up to date for boarding/travel",
        ],
    },
    {
        "category": "Regular Checkups",
        "icon": "medical-services",
        "color": "#5D688A",
        "web_url": "https://www.aaha.org/your-pet/pet-owner-education/",
        "tips": [
            "Annual wellness exams for healthy adult pets",
            "Senior pets (7+ years) need bi-annual checkups",
            "Early detection prevents serious health issues",
            "Dental examinations should be part of routine care",
            "Weight monitoring helps prevent obesity-related problems",
        ],
    },
    {
        "category": "Preventive Care",
        "icon": "health-and-safety",
        "color": "#A8BBA3",
        "web_url": "https://www.petmd.com/dog/care",
        "tips": [
            "Monthly flea and tick prevention year-round",
            "Regular deworming based on lifestyle and risk",
            "Heartworm prevention in mosquito-active areas",
            "Spaying/neutering prevents health and behavioral issues",
            "Regular grooming maintains skin and coat health",
        ],
    },
    {
        "category": "Emergency Preparedness",
        "icon": "emergency",
        "color": "#FF6B6B",
        "web_url": "https://www.aspca.org/pet-care/general-pet-care/disaster-preparedness",
        "tips": [
            "Know your nearest 24-hour emergency vet clinic",
            "Keep emergency contact numbers easily accessible",
            "Basic first aid kit for minor injuries",
            "Signs requiring immediate attention: difficulty breathing, seizures, bleeding",
            "Keep recent photos and medical records for identification",
        ],
    },
    {
        "category": "Nutrition & Diet",
        "icon": "restaurant",
        "color": "#FF9800",
        "web_url": "https://www.petnutritionalliance.org/",
        "tips": [
            "High-quality pet food appropriate for life stage",
            "Measure portions to prevent overfeeding",
            "Fresh water available at all times",
            "Avoid toxic foods: chocolate, grapes, onions, garlic",
            "Consult vet before changing diets or adding supplements",
        ],
    },
    {
        "category": "Exercise & Mental Health",
        "icon": "directions-run",
        "color": "#4CAF50",
        "web_url": "https://www.akc.org/expert-advice/health/exercise-dogs-guide/",
        "tips": [
            "Daily exercise requirements vary by breed and age",
            "Mental stimulation through training and puzzle toys",
            "Socialization with other pets and people",
            "Regular play sessions strengthen bonds",
            "Indoor cats need environmental enrichment",
        ],
    },
]
