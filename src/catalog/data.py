"""Seed data for the role catalog and the learning-resource library."""

# (title, industry, role_type, level, description, required_skills)
DEFAULT_ROLES = [
    ("Software Developer", "technology", "technical", "mid",
     "Develops software applications using programming languages and frameworks",
     ["Programming", "Problem Solving", "Data Structures", "Algorithms", "Version Control"]),
    ("Frontend Developer", "technology", "technical", "mid",
     "Creates user interfaces and client-side functionality for web applications",
     ["HTML/CSS", "JavaScript", "Frontend Frameworks", "UI/UX", "Responsive Design"]),
    ("Backend Developer", "technology", "technical", "mid",
     "Develops server-side logic and database interactions for applications",
     ["Server-side Languages", "Databases", "API Development", "Authentication", "Security"]),
    ("Full Stack Developer", "technology", "technical", "mid",
     "Develops both client-side and server-side components of applications",
     ["Frontend Technologies", "Backend Technologies", "Databases", "API Design", "System Architecture"]),
    ("DevOps Engineer", "technology", "technical", "mid",
     "Manages infrastructure, deployment, and operations for software systems",
     ["Continuous Integration", "Containerization", "Infrastructure as Code", "Cloud Services", "Monitoring"]),
    ("Data Scientist", "technology", "technical", "mid",
     "Analyzes data to extract insights and build predictive models",
     ["Statistics", "Machine Learning", "Data Analysis", "Python/R", "Data Visualization"]),
    ("Machine Learning Engineer", "technology", "technical", "senior",
     "Builds and deploys machine learning systems in production",
     ["Machine Learning Algorithms", "Deep Learning", "Python", "Model Deployment", "Feature Engineering"]),
    ("Cloud Solutions Architect", "technology", "technical", "senior",
     "Designs cloud infrastructure that balances cost, security and scale",
     ["Cloud Platforms", "Infrastructure Design", "System Architecture", "Security", "Cost Optimization"]),
    ("Cybersecurity Analyst", "technology", "technical", "mid",
     "Protects systems and networks from security threats",
     ["Network Security", "Threat Intelligence", "Security Protocols", "Incident Response", "Risk Assessment"]),
    ("Database Administrator", "technology", "technical", "mid",
     "Keeps databases available, performant and recoverable",
     ["SQL", "Database Systems", "Performance Tuning", "Backup & Recovery", "Data Security"]),
    ("Data Engineer", "technology", "technical", "mid",
     "Builds the pipelines that move and shape data for analysis",
     ["ETL Processes", "Data Pipelines", "Big Data Technologies", "SQL", "Data Modeling"]),
    ("Site Reliability Engineer", "technology", "technical", "senior",
     "Keeps production systems reliable through automation and monitoring",
     ["System Administration", "Automation", "Monitoring", "Incident Response", "Performance Optimization"]),
    ("Scrum Master", "technology", "leadership", "mid",
     "Facilitates agile teams and removes impediments",
     ["Agile Methodologies", "Facilitation", "Coaching", "Conflict Resolution", "Team Leadership"]),
    ("Product Owner", "technology", "business", "mid",
     "Owns the product backlog and represents stakeholders to the team",
     ["Product Management", "Stakeholder Management", "Backlog Prioritization",
      "User Story Writing", "Requirements Gathering"]),
    ("Agile Coach", "consulting", "leadership", "senior",
     "Guides organizations through agile adoption",
     ["Agile Frameworks", "Coaching", "Change Management", "Leadership", "Process Improvement"]),
    ("Program Manager", "technology", "leadership", "senior",
     "Coordinates related projects toward a strategic outcome",
     ["Program Planning", "Strategic Thinking", "Stakeholder Management", "Risk Management",
      "Resource Allocation"]),
    ("Product Manager", "technology", "business", "mid",
     "Defines product strategy from market and user research",
     ["Product Strategy", "Market Research", "User Experience", "Business Analysis", "Communication"]),
    ("Computer Vision Engineer", "technology", "research", "senior",
     "Builds systems that interpret images and video",
     ["Image Processing", "Machine Learning", "Computer Vision Algorithms", "Python", "Deep Learning"]),
    ("API Developer", "technology", "technical", "mid",
     "Designs and maintains service interfaces",
     ["API Design", "RESTful Services", "Authentication", "Documentation", "Performance Optimization"]),
    ("JavaScript Developer", "technology", "technical", "junior",
     "Builds interactive browser applications",
     ["JavaScript", "ES6+", "DOM Manipulation", "Async Programming", "Browser APIs"]),
    ("Financial Analyst", "finance", "finance", "mid",
     "Models financial performance and supports investment decisions",
     ["Financial Modeling", "Excel", "Accounting", "Data Analysis", "Communication"]),
    ("Digital Marketing Specialist", "media", "marketing", "junior",
     "Plans and measures online marketing campaigns",
     ["SEO", "Content Marketing", "Marketing Analytics", "Social Media", "Copywriting"]),
    ("Engineering Manager", "technology", "leadership", "senior",
     "Leads engineering teams and grows their people",
     ["Leadership", "Project Management", "System Architecture", "Hiring", "Communication"]),
    ("UX Designer", "technology", "creative", "mid",
     "Researches users and designs product experiences",
     ["User Research", "Wireframing", "Prototyping", "Usability Testing", "UI/UX"]),
]

# (title, resource_type, provider, duration_minutes, difficulty, skill_names, url)
DEFAULT_RESOURCES = [
    ("Python for Everybody", "course", "Coursera", 1200, "beginner",
     ["Python", "Programming"], "https://www.coursera.org/specializations/python"),
    ("SQL Fundamentals", "course", "Khan Academy", 300, "beginner",
     ["SQL", "Databases"], "https://www.khanacademy.org/computing/computer-programming/sql"),
    ("JavaScript: The Definitive Guide", "book", "O'Reilly", 1800, "intermediate",
     ["JavaScript"], None),
    ("Machine Learning Crash Course", "course", "Google", 900, "intermediate",
     ["Machine Learning", "Python"], "https://developers.google.com/machine-learning/crash-course"),
    ("Leading Agile Teams", "workshop", "Scrum.org", 480, "intermediate",
     ["Agile Methodologies", "Team Leadership", "Leadership"], None),
    ("System Design Primer", "article", "GitHub", 240, "advanced",
     ["System Architecture", "API Design"], "https://github.com/donnemartin/system-design-primer"),
    ("Statistics Self-Assessment", "assessment", "Upcraft", 45, "intermediate",
     ["Statistics", "Data Analysis"], None),
    ("Build a REST API", "project", "Upcraft", 600, "intermediate",
     ["API Development", "RESTful Services", "Authentication"], None),
    ("Effective Communication for Engineers", "video", "LinkedIn Learning", 90, "beginner",
     ["Communication", "Stakeholder Communication"], None),
    ("Docker and Kubernetes Workshop", "workshop", "CNCF", 360, "intermediate",
     ["Containerization", "Cloud Services", "Infrastructure as Code"], None),
]
