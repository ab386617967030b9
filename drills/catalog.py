"""
Drill Catalog - built-in baseball hitting drills

The catalog is fixed at import time. Declaration order is significant: the
matcher and the recommendation ranker both scan drills in this order.
"""

from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

from pydantic import ConfigDict

from analysis.models import CamelModel


Category = Literal["Stance", "Load", "Path", "Power", "Balance"]
Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


class Drill(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    steps: Tuple[str, ...]
    category: Category
    difficulty: Difficulty
    duration: str


_DRILL_DATA = [
    {
        "id": "tee-height",
        "title": "High/Low Tee Work",
        "description": "Work on maintaining a consistent swing plane across different strike zone heights.",
        "steps": [
            "Set the tee to the top of your strike zone (letters).",
            "Focus on a slight downward or level path to the ball to prevent popping up.",
            "Take 10 swings at the high location.",
            "Lower the tee to the bottom of the zone (knees).",
            'Focus on "staying through" the ball and using your legs to stay low.',
            "Take 10 swings at the low location.",
        ],
        "category": "Path",
        "difficulty": "Beginner",
        "duration": "15 mins",
    },
    {
        "id": "stop-at-contact",
        "title": "Stop at Contact",
        "description": "Swing and freeze at the point of impact to check your palm-up/palm-down position.",
        "steps": [
            "Take a normal setup and load.",
            "Swing at 75% speed and abruptly stop the bat at the point of impact.",
            "Check that your lead arm is firm and your top hand palm is facing up.",
            "Ensure your head is steady and eyes are on the contact point.",
            "Repeat 15 times to build muscle memory of the contact position.",
        ],
        "category": "Path",
        "difficulty": "Intermediate",
        "duration": "10 mins",
    },
    {
        "id": "walking-start",
        "title": "Walking Happy Gilmore",
        "description": "Develop momentum and rhythmic weight transfer from your load to your stride.",
        "steps": [
            "Stand 3 feet behind your normal hitting position.",
            "Step forward with your rear foot, then your lead foot in a rhythmic motion.",
            "As your lead foot plants, begin your load and fire the swing.",
            "Focus on the feeling of weight transferring from your back hip to your front side.",
            "Perform 10 reps focusing on fluidity, not max power.",
        ],
        "category": "Load",
        "difficulty": "Advanced",
        "duration": "20 mins",
    },
    {
        "id": "narrow-stance",
        "title": "Narrow Stance Drill",
        "description": "Forces better balance and core engagement by starting with feet close together.",
        "steps": [
            "Stand with your feet nearly touching in the box.",
            "Take a small, controlled stride forward.",
            "Keep your head center-mass and do not let it drift forward with the stride.",
            "Focus on your core rotating around a central pillar.",
            "Perform 20 swings focusing on maintaining perfect balance after the follow-through.",
        ],
        "category": "Stance",
        "difficulty": "Intermediate",
        "duration": "15 mins",
    },
    {
        "id": "med-ball-toss",
        "title": "Med Ball Side Toss",
        "description": "Develop explosive rotational power by tossing a medicine ball against a wall.",
        "steps": [
            "Hold a 4-8lb med ball with both hands at your waist.",
            "Assume your hitting stance.",
            "Load back into your rear hip, then explosively rotate and throw the ball against a wall.",
            'Ensure your rear foot "squishes the bug" and hips clear completely.',
            "Perform 3 sets of 8 reps per side.",
        ],
        "category": "Power",
        "difficulty": "Intermediate",
        "duration": "15 mins",
    },
    {
        "id": "one-hand",
        "title": "Top Hand Isolation",
        "description": "Use a short bat to practice keeping your top hand tight to your body during the turn.",
        "steps": [
            "Hold a short training bat (or grip your normal bat at the barrel) with only your top hand.",
            "Assume your stance and load.",
            'Focus on leading with your elbow and keeping the bat "in the slot" near your shoulder.',
            "Swing through contact focusing on a strong palm-up finish.",
            "Perform 10 controlled swings.",
        ],
        "category": "Path",
        "difficulty": "Advanced",
        "duration": "10 mins",
    },
    {
        "id": "balance-beam",
        "title": "Balance Beam Hitting",
        "description": "Improve balance and posture by hitting while standing on a 2x4 or balance beam.",
        "steps": [
            "Place a 2x4 on the ground or use a balance beam.",
            "Take your stance on the beam, feet shoulder-width apart.",
            "Perform slow-motion swings first to get your balance.",
            "Progress to full swings focusing on staying on the beam throughout.",
            "Complete 15 successful swings without stepping off.",
        ],
        "category": "Balance",
        "difficulty": "Intermediate",
        "duration": "20 mins",
    },
    {
        "id": "knee-down-tee",
        "title": "Knee Down Tee Work",
        "description": "Forces proper upper body mechanics by eliminating lower body movement.",
        "steps": [
            "Kneel on both knees with the tee positioned at waist height.",
            "Focus on rotating your upper body while keeping your lower body stable.",
            "Maintain a tall posture and avoid lunging at the ball.",
            "Drive your hands through the ball with a strong finish.",
            "Take 20 swings focusing on pure upper body rotation.",
        ],
        "category": "Path",
        "difficulty": "Beginner",
        "duration": "15 mins",
    },
    {
        "id": "stride-freeze",
        "title": "Stride Freeze Drill",
        "description": "Practice landing in a powerful, balanced position after your stride.",
        "steps": [
            "Take your normal stance and begin your load.",
            "Stride forward and freeze in your landing position.",
            "Check that your weight is 50/50 and your head is centered.",
            "Hold the position for 3 seconds before completing the swing.",
            "Repeat 12 times focusing on a stable landing.",
        ],
        "category": "Load",
        "difficulty": "Beginner",
        "duration": "10 mins",
    },
    {
        "id": "closed-eyes",
        "title": "Closed Eyes Swing",
        "description": "Develop feel and muscle memory by swinging with eyes closed after load.",
        "steps": [
            "Take your normal stance and load with eyes open.",
            "Close your eyes just before starting your swing.",
            "Focus on feeling your body movements and balance.",
            "Complete the swing based on muscle memory alone.",
            "Open your eyes and check your finish position. Repeat 10 times.",
        ],
        "category": "Balance",
        "difficulty": "Advanced",
        "duration": "15 mins",
    },
    {
        "id": "weighted-bat",
        "title": "Weighted Bat Swings",
        "description": "Build bat speed and strength using a slightly heavier training bat.",
        "steps": [
            "Use a bat that is 2-4 ounces heavier than your game bat.",
            "Take 5 slow practice swings to get used to the weight.",
            "Perform 10 full-speed swings focusing on good mechanics.",
            "Switch back to your regular bat (it will feel lighter).",
            "Take 5 more swings with your game bat to reinforce speed.",
        ],
        "category": "Power",
        "difficulty": "Intermediate",
        "duration": "12 mins",
    },
    {
        "id": "two-ball-toss",
        "title": "Two-Ball Color Recognition",
        "description": "Improve pitch recognition and decision-making skills.",
        "steps": [
            "Have a partner toss two balls of different colors.",
            "Partner calls out which color to hit mid-flight.",
            "Focus on tracking the correct ball and ignoring the other.",
            "Make contact only with the designated color ball.",
            "Complete 20 successful recognitions and hits.",
        ],
        "category": "Stance",
        "difficulty": "Advanced",
        "duration": "20 mins",
    },
    {
        "id": "back-hand",
        "title": "Bottom Hand Only",
        "description": "Strengthen your lead arm and improve bat control with bottom hand swings.",
        "steps": [
            "Hold the bat with only your bottom hand (lead hand).",
            "Use a lighter bat or choke up for better control.",
            "Focus on a smooth, level swing path.",
            "Keep your elbow slightly bent but firm through contact.",
            "Perform 15 controlled swings per hand.",
        ],
        "category": "Path",
        "difficulty": "Intermediate",
        "duration": "12 mins",
    },
    {
        "id": "quick-hands",
        "title": "Quick Hands Drill",
        "description": "Develop bat speed and quick hands through rapid short swings.",
        "steps": [
            "Stand closer to the tee than normal (reduced distance).",
            "Focus on minimal load and explosive hand action.",
            "Take short, compact swings with maximum hand speed.",
            "Don't try to kill the ball - focus on quickness.",
            "Perform 3 sets of 8 rapid-fire swings.",
        ],
        "category": "Power",
        "difficulty": "Intermediate",
        "duration": "10 mins",
    },
    {
        "id": "towel-drill",
        "title": "Towel Under Arm",
        "description": "Keep your front elbow connected to your body for proper swing mechanics.",
        "steps": [
            "Tuck a small towel under your front elbow.",
            "Take your stance and load normally.",
            "Swing without letting the towel fall until after contact.",
            "Focus on keeping your elbow connected to your body.",
            "Complete 15 successful swings with the towel in place.",
        ],
        "category": "Path",
        "difficulty": "Beginner",
        "duration": "10 mins",
    },
    {
        "id": "mirror-work",
        "title": "Mirror Swing Analysis",
        "description": "Use a mirror for real-time visual feedback on your mechanics.",
        "steps": [
            "Set up a mirror where you can see your full swing.",
            "Perform 5 slow-motion swings watching your posture.",
            "Check that your spine angle stays consistent.",
            "Verify your hands stay inside the ball path.",
            "Take 10 full-speed swings while monitoring key positions.",
        ],
        "category": "Stance",
        "difficulty": "Beginner",
        "duration": "15 mins",
    },
    {
        "id": "band-resistance",
        "title": "Resistance Band Swings",
        "description": "Add resistance to build strength and improve swing path.",
        "steps": [
            "Attach a resistance band to a sturdy object at chest height.",
            "Hold the band handle like you would hold a bat.",
            "Perform slow swings against the resistance.",
            "Focus on maintaining proper mechanics despite the resistance.",
            "Complete 3 sets of 12 swings per direction.",
        ],
        "category": "Power",
        "difficulty": "Intermediate",
        "duration": "15 mins",
    },
    {
        "id": "timing-drill",
        "title": "Variable Timing Drill",
        "description": "Improve your ability to adjust to different pitch speeds.",
        "steps": [
            "Have a partner vary the timing of their tosses.",
            "Some tosses should be quick, others with a pause.",
            "Focus on loading and timing based on the pitcher's motion.",
            "Don't commit to your swing until you recognize the release.",
            "Complete 20 varied timing attempts.",
        ],
        "category": "Load",
        "difficulty": "Advanced",
        "duration": "20 mins",
    },
    {
        "id": "follow-through",
        "title": "Perfect Follow-Through",
        "description": "Focus specifically on finishing your swing with proper extension and balance.",
        "steps": [
            "Take normal swings but exaggerate your follow-through.",
            "Focus on full extension past the contact point.",
            "Ensure your back shoulder finishes lower than your front.",
            "Hold your finish position for 2 seconds after each swing.",
            "Complete 15 swings focusing on the finish.",
        ],
        "category": "Path",
        "difficulty": "Beginner",
        "duration": "10 mins",
    },
    {
        "id": "chair-drill",
        "title": "Seat Belt Chair Drill",
        "description": "Prevent lunging by keeping your back against a chair during swing.",
        "steps": [
            "Place a chair directly behind your rear hip.",
            "Take your stance with your back lightly touching the chair.",
            "Swing without losing contact with the chair until after contact.",
            "This prevents you from lunging forward at the ball.",
            "Complete 20 swings staying connected to the chair.",
        ],
        "category": "Stance",
        "difficulty": "Intermediate",
        "duration": "15 mins",
    },
]

ALL_DRILLS: Tuple[Drill, ...] = tuple(Drill.model_validate(data) for data in _DRILL_DATA)

_DRILLS_BY_ID: Dict[str, Drill] = {drill.id: drill for drill in ALL_DRILLS}


def get_drill(drill_id: str) -> Optional[Drill]:
    """Look up a catalog drill by id."""
    return _DRILLS_BY_ID.get(drill_id)
